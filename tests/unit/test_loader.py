from authform_detector.detection.loader import Document, iter_ancestors, load_document  # type: ignore[import]


def test_load_document_tolerates_garbage():
    for markup in (None, "", "<<<>>>", "\x00\x01<div", 42):
        document = load_document(markup)
        assert isinstance(document, Document)
        assert document.inputs() == []


def test_inputs_are_returned_in_document_order():
    document = load_document('<input name="a"><div><input name="b"></div><input name="c" type="password">')

    assert [element.get("name") for element in document.inputs()] == ["a", "b", "c"]


def test_iter_ancestors_stops_before_body():
    document = load_document("<html><body><main><div><input></div></main></body></html>")
    element = document.inputs()[0]

    assert [ancestor.name for ancestor in iter_ancestors(element, 10)] == ["div", "main"]


def test_iter_ancestors_respects_depth():
    document = load_document("<div>" * 4 + "<input>" + "</div>" * 4)
    element = document.inputs()[0]

    assert len(list(iter_ancestors(element, 2))) == 2
    assert len(list(iter_ancestors(element, 10))) == 4


def test_text_of_collapses_whitespace():
    document = load_document("<div>  Sign\n   <b>in</b>  </div>")

    assert Document.text_of(document.soup.div) == "sign in"
