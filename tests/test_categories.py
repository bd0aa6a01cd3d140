import pytest

from foldersort_app.core.categories import (
    CATEGORY_EXTENSIONS,
    Category,
    category_for,
    get_file_extension,
)


@pytest.mark.parametrize(
    "ext, expected",
    [
        ("jpg", Category.IMAGES),
        ("JPG", Category.IMAGES),
        ("Svg", Category.IMAGES),
        ("docx", Category.DOCUMENTS),
        ("CSV", Category.DOCUMENTS),
        ("flac", Category.AUDIOS),
        ("mkv", Category.VIDEOS),
        ("xyz123", Category.OTHERS),
        ("", Category.OTHERS),
    ],
)
def test_category_for(ext, expected):
    assert category_for(ext) is expected


def test_category_for_is_case_insensitive():
    assert category_for("JPG") is category_for("jpg") is Category.IMAGES


def test_every_listed_extension_maps_to_its_own_category():
    for category, extensions in CATEGORY_EXTENSIONS.items():
        for ext in extensions:
            assert category_for(ext) is category


def test_extension_tables_are_read_only():
    with pytest.raises(TypeError):
        CATEGORY_EXTENSIONS[Category.OTHERS] = frozenset({"zip"})


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.JPG", "jpg"),
        ("archive.tar.gz", "gz"),
        ("/some/dir/notes.txt", "txt"),
        ("README", ""),
        ("trailing.", ""),
        (".bashrc", "bashrc"),
    ],
)
def test_get_file_extension(name, expected):
    assert get_file_extension(name) == expected


def test_category_from_name():
    assert Category.from_name("images") is Category.IMAGES
    assert Category.from_name(" Videos ") is Category.VIDEOS
    with pytest.raises(ValueError):
        Category.from_name("Spreadsheets")
