from tldrhooks.tools.output_trimmer import summarize


def test_summarize_short_output_is_trimmed_only() -> None:
    assert summarize("  a\nb\nc\n\n") == "a\nb\nc"
    assert summarize("one line") == "one line"


def test_summarize_exactly_five_lines_unchanged() -> None:
    output = "1\n2\n3\n4\n5"
    assert summarize(output) == output


def test_summarize_long_output_keeps_first_five_lines() -> None:
    assert summarize("a\nb\nc\nd\ne\nf\ng") == "a\nb\nc\nd\ne\n... (2 more lines)"


def test_summarize_counts_lines_after_trimming() -> None:
    # Trailing blank lines are stripped before counting
    assert summarize("\n\na\nb\nc\nd\ne\nf\n\n\n") == "a\nb\nc\nd\ne\n... (1 more lines)"


def test_summarize_empty_output() -> None:
    assert summarize("") == ""
    assert summarize("   \n  ") == ""


def test_summarize_never_cuts_inside_a_line() -> None:
    long_line = "x" * 5000
    output = "\n".join([long_line] * 8)
    summary = summarize(output)
    assert summary.split("\n")[:5] == [long_line] * 5
    assert summary.endswith("... (3 more lines)")


def test_summarize_is_deterministic() -> None:
    output = "\n".join(str(i) for i in range(40))
    assert summarize(output) == summarize(output)
