from pingsim.simulator.formatting import (
    fmt_ms,
    fmt_pct,
    header_line,
    hop_line,
    reply_line,
    timeout_line,
    trace_header_line,
)


def test_fmt_ms_rounds_half_up():
    assert fmt_ms(0.25) == "0.3"
    assert fmt_ms(12.0) == "12.0"
    assert fmt_ms(9.96) == "10.0"
    assert fmt_ms(0.3) == "0.3"


def test_fmt_pct():
    assert fmt_pct(0) == "0"
    assert fmt_pct(12.5) == "13"
    assert fmt_pct(33.333) == "33"
    assert fmt_pct(100.0) == "100"


def test_ping_lines():
    assert header_line("10.0.0.2", 56) == "PING 10.0.0.2 (10.0.0.2) 56(84) bytes of data:"
    assert reply_line("10.0.0.2", 56, 3, 57, 14.26) == "56 bytes from 10.0.0.2: icmp_seq=3 ttl=57 time=14.3 ms"
    assert timeout_line(2) == "Request timeout for icmp_seq 2"


def test_trace_lines():
    assert trace_header_line("8.8.8.8", 7) == "traceroute to 8.8.8.8, 7 hops max"
    assert hop_line(3, "1.2.3.4", ["5.1 ms", "*", "12.0 ms"]) == " 3  1.2.3.4  5.1 ms       *  12.0 ms"
    assert hop_line(10, "1.2.3.4", ["5.1 ms"] * 3) == "10  1.2.3.4  5.1 ms  5.1 ms  5.1 ms"


def test_all_star_hop_hides_address():
    assert hop_line(4, "1.2.3.4", ["*", "*", "*"]) == " 4  *  *  *"
