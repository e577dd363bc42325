from icmpping.codes import icmp_error_text
from icmpping.output import (
    bad_response,
    reply_header,
    reply_source,
    socket_info,
    start_line,
)


def test_socket_info_mentions_fd_and_name():
    text = socket_info(3, "example.com")
    assert text.startswith("ping: sock4.fd: 3, (socktype: SOCK_RAW), hints.ai_family: AF_INET\n\n")
    assert text.endswith("ai->ai_family: AF_INET, ai->ai_canonname: 'example.com'\n")


def test_start_line():
    assert start_line("example.com", "127.0.0.1") == (
        "PING example.com (127.0.0.1) 56(84) bytes of data\n"
    )


def test_reply_source():
    assert reply_source(64, "example.com", "127.0.0.1") == "64 bytes from example.com (127.0.0.1): "


def test_reply_header_short_time_uses_two_decimals():
    text = reply_header(1, 77, 64, 3.456, False)
    assert text == "icmp_seq=1 ttl=64 temps=3.46 ms\n"


def test_reply_header_long_time_uses_one_decimal():
    text = reply_header(2, 77, 64, 12.34, False)
    assert text.endswith("temps=12.3 ms\n")
    assert "ident=" not in text


def test_reply_header_verbose_shows_ident():
    text = reply_header(5, 4242, 64, 1.0, True)
    assert "ident=4242 " in text
    assert text.index("icmp_seq=5") < text.index("ident=4242") < text.index("ttl=64")


def test_bad_response_plain():
    text = bad_response("10.0.0.1", 7, 3, 1, False)
    assert text == "From 10.0.0.1 (10.0.0.1): icmp_seq=7 " + icmp_error_text(3, 1) + "\n"


def test_bad_response_verbose_shows_type_and_code():
    text = bad_response("10.0.0.1", 7, 11, 0, True)
    assert text.endswith("type=11 code=0\n")
    assert "Time To Live exceeded " in text


def test_bad_response_unknown_type_has_no_description():
    text = bad_response("10.0.0.1", 1, 99, 0, False)
    assert text == "From 10.0.0.1 (10.0.0.1): icmp_seq=1 \n"