import pytest

from rivl_import.exceptions import FormatError
from rivl_import.rivl_format.rivl_document import parse_document, parse_document_string


def test_parse_elements_attributes_and_text():
    root = parse_document_string(
        '<BGFscene><Material type="a" name="b"><param name="x" type="float">1</param>'
        '</Material><Group>1 2</Group></BGFscene>'
    )
    assert root.name == "BGFscene"
    assert [c.name for c in root.children] == ["Material", "Group"]
    mat = root.children[0]
    assert mat.attributes == [("type", "a"), ("name", "b")]
    assert mat.get("name") == "b"
    assert mat.get("missing") is None
    assert mat.has("type")
    assert mat.children[0].text == "1"
    assert root.children[1].text == "1 2"


def test_body_text_excludes_nested_element_text():
    root = parse_document_string("<BGFscene><Group>1 <inner>9</inner> 2</Group></BGFscene>")
    assert root.children[0].text == "1  2"


def test_comments_are_dropped():
    root = parse_document_string("<BGFscene><!-- note --><Group/></BGFscene>")
    assert len(root.children) == 1
    assert root.children[0].text == ""


def test_wrong_root_is_rejected():
    with pytest.raises(FormatError, match="not in expected format"):
        parse_document_string("<Scene><Group/></Scene>")


def test_empty_scene_is_rejected():
    with pytest.raises(FormatError):
        parse_document_string("<BGFscene></BGFscene>")
    with pytest.raises(FormatError):
        parse_document_string("<BGFscene>   </BGFscene>")


def test_malformed_markup_is_a_format_error(tmp_path):
    path = tmp_path / "bad.rivl"
    path.write_text("<BGFscene><Group></BGFscene>")
    with pytest.raises(FormatError):
        parse_document(str(path))
