import pytest

from yaml_diffkit.errors import PathSyntaxError
from yaml_diffkit.model.paths import Path, PathElement, is_go_patch_path, parse_path, path_to_string


def test_parse_go_patch_path():
    path = parse_path("/spec/containers/name=nginx/ports/0")
    assert path.elements == (
        PathElement(name="spec"),
        PathElement(name="containers"),
        PathElement(key="name", name="nginx"),
        PathElement(name="ports"),
        PathElement(idx=0),
    )
    assert str(path) == "/spec/containers/name=nginx/ports/0"
    assert path.to_dot_style() == "spec.containers.name=nginx.ports[0]"


def test_dot_and_go_patch_styles_share_canonical_form():
    assert str(parse_path("spec.ports[0][1].name")) == "/spec/ports/0/1/name"
    assert str(parse_path("spec.ports.0.name")) == str(parse_path("/spec/ports/0/name"))


def test_root_path():
    root = parse_path("/")
    assert root.elements == ()
    assert str(root) == "/"
    assert root.to_dot_style() == ""


def test_trailing_slash_is_ignored():
    assert str(parse_path("/a/b/")) == "/a/b"


def test_leading_index_in_dot_style():
    path = Path((PathElement(idx=2), PathElement(name="kind")))
    assert path.to_dot_style() == "[2].kind"
    assert str(parse_path("[2].kind")) == "/2/kind"


@pytest.mark.parametrize(
    "text",
    ["", "   ", "a..b", "/a//b", "//", "a[", "a]", "a[x]", "a[]", "a[0]b", "a[0", "/list/=x", "/list/name="],
)
def test_invalid_paths(text):
    with pytest.raises(PathSyntaxError):
        parse_path(text)


def test_is_go_patch_path():
    assert is_go_patch_path("/a")
    assert not is_go_patch_path("a/b")


def test_path_to_string():
    path = parse_path("/a/0", document_index=1)
    assert path_to_string(path, use_go_patch_paths=True, show_path_root=False) == "/a/0"
    assert path_to_string(path, use_go_patch_paths=False, show_path_root=False) == "a[0]"
    assert path_to_string(path, use_go_patch_paths=True, show_path_root=True) == "(document #2) /a/0"
    assert path_to_string(None, use_go_patch_paths=True, show_path_root=True) == "/"
    assert path_to_string(None, use_go_patch_paths=False, show_path_root=False) == "(root level)"
