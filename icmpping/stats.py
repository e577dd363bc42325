"""Round-trip time bookkeeping and the statistics reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

_MICROS = 1_000_000

Timeval = Tuple[int, int]


def to_milliseconds(seconds: int, microseconds: int) -> float:
    """A time given in seconds and microseconds, in milliseconds."""
    return seconds * 1000.0 + microseconds / 1000.0


def _micros_to_ms(micros: int) -> float:
    seconds, rest = divmod(micros, _MICROS)
    return to_milliseconds(seconds, rest)


@dataclass
class PingStats:
    """Counters and round-trip times of one ping session."""

    transmitted: int = 0
    received: int = 0
    errors: int = 0
    rtts: List[int] = field(default_factory=list)

    def record(self, sent_at: Timeval, received_at: Timeval) -> float:
        """Store the round trip of one reply and return it in milliseconds."""
        micros = (received_at[0] - sent_at[0]) * _MICROS + (received_at[1] - sent_at[1])
        self.rtts.append(micros)
        self.received += 1
        return _micros_to_ms(micros)

    def minimum(self) -> Optional[float]:
        """The shortest round trip in milliseconds, or ``None``."""
        return _micros_to_ms(min(self.rtts)) if self.rtts else None

    def maximum(self) -> Optional[float]:
        """The longest round trip in milliseconds, or ``None``."""
        return _micros_to_ms(max(self.rtts)) if self.rtts else None

    def average(self) -> Optional[float]:
        """The mean round trip in milliseconds, or ``None``."""
        if not self.rtts or not self.received:
            return None
        return sum(_micros_to_ms(rtt) for rtt in self.rtts) / self.received

    def mean_deviation(self) -> Optional[float]:
        """Mean absolute difference of the round trips from their average."""
        average = self.average()
        if average is None:
            return None
        return sum(abs(average - _micros_to_ms(rtt)) for rtt in self.rtts) / self.received

    def loss_percent(self) -> int:
        """Whole percentage of requests that got no reply."""
        if not self.transmitted:
            return 0
        lost = (self.transmitted - self.received) * 100
        whole = abs(lost) // self.transmitted
        return whole if lost >= 0 else -whole

    def final_report(self, hostname: str, elapsed_ms: float) -> str:
        """The summary printed when the session ends."""
        lines = [
            f"\n--- {hostname} ping statistics ---\n",
            f"{self.transmitted} packets transmitted, {self.received} received, ",
        ]
        if self.errors:
            lines.append(f"+{self.errors} errors, ")
        lines.append(f"{self.loss_percent()}% packet loss, time {elapsed_ms:.0f}ms\n")
        if self.received and self.rtts:
            lines.append(
                "rtt min/avg/max/mdev = "
                f"{self.minimum():.3f}/{self.mean_deviation():.3f}/"
                f"{self.maximum():.3f}/{self.average():.3f} ms"
            )
        lines.append("\n")
        return "".join(lines)

    def interim_report(self) -> str:
        """The short summary printed on request while the session runs."""
        text = f"\n{self.received}/{self.transmitted} packets, {self.loss_percent()}% loss"
        if self.received and self.rtts:
            text += (
                ", min/avg/ewma/max = "
                f"{self.minimum():.3f}/{self.average():.3f}/"
                f"{self.mean_deviation():.3f}/{self.maximum():.3f} ms"
            )
        return text + "\n"