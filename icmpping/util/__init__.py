"""Small helpers for characters, numbers, strings, byte buffers, linked lists and printf-style output."""