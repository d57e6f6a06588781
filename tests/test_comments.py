from commentscan.comments import CommentSpan, detect_comment_types, extract_comments
from commentscan.profiles import C_FAMILY, HASH_TRIPLE, MARKUP_EMBEDDED


def _kinds(spans, kind):
    return [s for s in spans if s.kind == kind]


def test_block_matching_is_non_greedy():
    spans = extract_comments("/* a */ x /* b */", C_FAMILY)
    assert [s.text for s in spans] == ["/* a */", "/* b */"]
    assert all(s.kind == "block" for s in spans)


def test_block_span_line_range_and_delimiters():
    text = "var a;\n/* one\n two\n*/\nvar b;"
    (span,) = extract_comments(text, C_FAMILY)
    assert (span.start_line, span.end_line) == (2, 4)
    assert span.text.startswith("/*") and span.text.endswith("*/")


def test_url_is_not_a_line_comment():
    assert _kinds(extract_comments("see http://example.com", C_FAMILY), "line") == []
    assert detect_comment_types("see http://example.com", C_FAMILY) == set()


def test_url_guard_resumes_on_same_line():
    spans = extract_comments("http://example.com //real comment", C_FAMILY)
    assert len(spans) == 1
    assert spans[0].kind == "line"
    assert spans[0].text == "//real comment"


def test_marker_at_line_start_is_accepted():
    (span,) = extract_comments("//top", C_FAMILY)
    assert span.text == "//top"


def test_one_line_comment_per_line():
    spans = extract_comments("a(); // first // second", C_FAMILY)
    assert [s.text for s in spans] == ["// first // second"]


def test_line_marker_inside_block_is_reported_twice():
    spans = extract_comments("/* see // inside */", C_FAMILY)
    assert [(s.kind, s.text) for s in spans] == [
        ("block", "/* see // inside */"),
        ("line", "// inside */"),
    ]


def test_unterminated_block_produces_no_span():
    assert _kinds(extract_comments("a(); /* never closed\nb();", C_FAMILY), "block") == []
    # a closing marker before the opener does not count
    assert _kinds(extract_comments("a */ b /* c", C_FAMILY), "block") == []


def test_unterminated_block_borrows_a_later_closer():
    spans = _kinds(extract_comments("/* open\ncode();\nx = 1; /* real */", C_FAMILY), "block")
    assert len(spans) == 1
    assert (spans[0].start_line, spans[0].end_line) == (1, 3)


def test_markup_comments_in_vue():
    text = "<template>\n  <!-- hi\n  there -->\n</template>\n<script>\n// s\n</script>"
    spans = extract_comments(text, MARKUP_EMBEDDED)
    assert [(s.kind, s.start_line, s.end_line) for s in spans] == [
        ("markup", 2, 3),
        ("line", 6, 6),
    ]
    assert detect_comment_types(text, MARKUP_EMBEDDED) == {"markup", "line"}


def test_markup_detector_only_needs_opener():
    text = "<div><!-- open</div>"
    assert detect_comment_types(text, MARKUP_EMBEDDED) == {"markup"}
    assert extract_comments(text, MARKUP_EMBEDDED) == []


def test_hash_and_triple_quote_blocks():
    text = 'x = 1  # note\n"""doc\nstring"""\nurl = "http://a" # tail\n'
    spans = extract_comments(text, HASH_TRIPLE)
    assert [(s.kind, s.start_line, s.end_line, s.text) for s in spans] == [
        ("line", 1, 1, "# note"),
        ("block", 2, 3, '"""doc\nstring"""'),
        ("line", 4, 4, "# tail"),
    ]
    assert detect_comment_types(text, HASH_TRIPLE) == {"line", "block"}


def test_detector_requires_whitespace_before_line_marker():
    assert detect_comment_types("x = 1;//c", C_FAMILY) == set()
    assert [s.text for s in extract_comments("x = 1;//c", C_FAMILY)] == ["//c"]


def test_detector_empty_for_plain_code():
    assert detect_comment_types(".a { color: red; }\n", C_FAMILY) == set()


def test_sorted_by_line_then_kind():
    text = "// one\n/* two */ // three\n"
    spans = extract_comments(text, C_FAMILY)
    assert [(s.start_line, s.kind) for s in spans] == [(1, "line"), (2, "block"), (2, "line")]


def test_crlf_line_comment_excludes_carriage_return():
    (span,) = extract_comments("a();\r\n// b\r\nc();", C_FAMILY)
    assert (span.start_line, span.text) == (2, "// b")


def test_extraction_is_idempotent():
    text = "/* a */\n// b\nhttp://x // c\n"
    assert extract_comments(text, C_FAMILY) == extract_comments(text, C_FAMILY)


def test_span_helpers():
    span = CommentSpan("block", 3, 5, "/* x */")
    assert span.line_range() == "3-5"
    assert span.line_range("L") == "L3-L5"
    assert CommentSpan("line", 7, 7, "// y").line_range("L") == "L7"
    assert span.to_dict() == {"type": "block", "startLine": 3, "endLine": 5, "text": "/* x */"}
