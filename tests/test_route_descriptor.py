from ruxt.domain.models import ExpandConfig
from ruxt.pages.descriptor import build_descriptor, is_module_support, url_path_for


def test_top_level_index_maps_to_root():
    d = build_descriptor(["index"])
    assert d.url_path == "/"
    assert d.handler_reference == ("pages", "index", "page")


def test_nested_index_maps_to_folder():
    d = build_descriptor(["foo", "index"])
    assert d.url_path == "/foo"
    assert d.handler_reference == ("pages", "foo", "index", "page")
    assert d.handler_name == "pages.foo.index.page"


def test_plain_page_keeps_all_segments():
    d = build_descriptor(["foo", "bar"])
    assert d.url_path == "/foo/bar"
    assert d.handler_reference == ("pages", "foo", "bar", "page")


def test_only_trailing_index_is_elided():
    assert url_path_for(["index", "about"]) == "/index/about"


def test_builder_is_pure():
    a = build_descriptor(["docs", "index"])
    b = build_descriptor(["docs", "index"])
    assert a == b
    assert (a.url_path, a.handler_reference) == (b.url_path, b.handler_reference)


def test_url_collisions_are_not_detected():
    # foo.py and foo/index.py both serve /foo
    assert build_descriptor(["foo"]).url_path == build_descriptor(["foo", "index"]).url_path


def test_custom_symbols():
    config = ExpandConfig(index_marker="home", root_symbol="views", handler_symbol="handler")
    d = build_descriptor(["blog", "home"], config)
    assert d.url_path == "/blog"
    assert d.handler_reference == ("views", "blog", "home", "handler")


def test_module_markers():
    config = ExpandConfig()
    assert is_module_support(["mod", "thing"], config)
    assert is_module_support(["foo", "__init__"], config)
    assert not is_module_support(["modules", "thing"], config)
