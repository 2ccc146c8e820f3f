import pytest

from minish.text import split_fields


def test_split_path_like_value():
    assert split_fields("/usr/bin:/bin", ":") == ["/usr/bin", "/bin"]


def test_repeated_separators_produce_no_empty_fields():
    assert split_fields("::/usr/bin:::/bin::", ":") == ["/usr/bin", "/bin"]


def test_empty_string_gives_no_fields():
    assert split_fields("", ":") == []


def test_only_separators_gives_no_fields():
    assert split_fields(":::", ":") == []


def test_no_separator_gives_whole_text():
    assert split_fields("/usr/local/bin", ":") == ["/usr/local/bin"]


@pytest.mark.parametrize("text", ["a:b:c", ":x::y:", "one", "", "::", "p q:r"])
def test_fields_never_contain_separator_or_are_empty(text):
    fields = split_fields(text, ":")
    assert all(field and ":" not in field for field in fields)
    assert "".join(fields) == text.replace(":", "")


def test_empty_separator_rejected():
    with pytest.raises(ValueError):
        split_fields("abc", "")