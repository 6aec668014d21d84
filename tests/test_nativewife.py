from datetime import date

import pytest

from qbotkit.nativewife import WifeGallery, daily_wife, sanitize_wife_name


def test_sanitize_strips_command_spaces_and_separators():
    assert sanitize_wife_name("添加wife 小 明", "添加wife") == "小明"
    assert sanitize_wife_name("删除wife a/b\\c", "删除wife") == "abc"


def test_sanitize_uses_last_command_occurrence():
    assert sanitize_wife_name("添加wife添加wife名", "添加wife") == "名"


def test_sanitize_empty_name():
    assert sanitize_wife_name("添加wife ", "添加wife") == ""


def test_daily_wife_is_stable_and_in_names():
    names = ["a", "b", "c", "d"]
    day = date(2022, 12, 14)
    first = daily_wife(names, "nick", day)
    assert first in names
    assert daily_wife(names, "nick", day) == first


def test_daily_wife_varies_across_days():
    names = [str(i) for i in range(50)]
    picks = {daily_wife(names, "nick", date(2022, 1, d)) for d in range(1, 29)}
    assert len(picks) > 1


def test_daily_wife_empty_raises():
    with pytest.raises(LookupError):
        daily_wife([], "nick", date(2022, 1, 1))


def test_gallery_add_list_remove(tmp_path):
    gallery = WifeGallery(tmp_path)
    assert gallery.wives(1234) == []
    gallery.add(1234, "b", b"x")
    path = gallery.add(1234, "a", b"yy")
    assert path.read_bytes() == b"yy"
    assert gallery.wives(1234) == ["a", "b"]
    gallery.remove(1234, "a")
    assert gallery.wives(1234) == ["b"]


def test_gallery_folder_is_base36(tmp_path):
    gallery = WifeGallery(tmp_path)
    path = gallery.add(36, "w", b"1")
    assert path.parent.name == "10"


def test_remove_missing_raises(tmp_path):
    gallery = WifeGallery(tmp_path)
    with pytest.raises(FileNotFoundError):
        gallery.remove(5, "ghost")


def test_add_without_name_raises(tmp_path):
    with pytest.raises(ValueError):
        WifeGallery(tmp_path).add(5, "", b"1")


def test_draw_empty_single_and_many(tmp_path):
    gallery = WifeGallery(tmp_path)
    with pytest.raises(LookupError):
        gallery.draw(7, "nick", date(2022, 5, 5))
    gallery.add(7, "only", b"1")
    name, path = gallery.draw(7, "nick", date(2022, 5, 5))
    assert name == "only"
    assert path.read_bytes() == b"1"
    for extra in ("x", "y", "z"):
        gallery.add(7, extra, b"2")
    name, path = gallery.draw(7, "nick", date(2022, 5, 5))
    assert name == daily_wife(gallery.wives(7), "nick", date(2022, 5, 5))
    assert path.name == name