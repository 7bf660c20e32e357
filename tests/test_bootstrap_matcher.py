import ast
import textwrap

from ruxt.domain.models import ExpandConfig
from ruxt.expanders.bootstrap.matcher import find_bootstrap_call


def parse(src: str) -> ast.Module:
    return ast.parse(textwrap.dedent(src))


def test_finds_simple_bootstrap():
    tree = parse(
        """
        def main():
            return HttpServer.new(lambda: App.new()).bind(("0.0.0.0", 8080)).run()
        """
    )
    site = find_bootstrap_call(tree)
    assert site is not None
    assert site.callee == ("HttpServer", "new")
    assert ast.unparse(site.closure) == "lambda: App.new()"
    assert site.lineno == 3


def test_finds_qualified_callee_nested_in_other_expressions():
    tree = parse(
        """
        async def main():
            data = "x"
            await wrap(run(actix.HttpServer.new(lambda: App.new().app_data(data))))
        """
    )
    site = find_bootstrap_call(tree)
    assert site is not None
    assert site.callee == ("actix", "HttpServer", "new")


def test_named_function_argument_is_skipped():
    tree = parse(
        """
        def main():
            return HttpServer.new(app).run()
        """
    )
    assert find_bootstrap_call(tree) is None


def test_no_arguments_is_skipped():
    tree = parse("HttpServer.new()")
    assert find_bootstrap_call(tree) is None


def test_requires_both_factory_and_constructor():
    tree = parse(
        """
        HttpServer.build(lambda: App.new())
        Server.new(lambda: App.new())
        """
    )
    assert find_bootstrap_call(tree) is None


def test_search_continues_after_unsupported_site():
    tree = parse(
        """
        def main():
            first = HttpServer.new(app)
            helper(1, 2)
            second = HttpServer.new(lambda: App.new())
        """
    )
    site = find_bootstrap_call(tree)
    assert site is not None
    assert site.lineno == 5


def test_first_match_in_source_order():
    tree = parse(
        """
        def main():
            a = HttpServer.new(lambda: First.new())
            b = HttpServer.new(lambda: Second.new())
        """
    )
    site = find_bootstrap_call(tree)
    assert ast.unparse(site.closure.body) == "First.new()"


def test_custom_names():
    tree = parse("Gateway.create(lambda: App())")
    config = ExpandConfig(factory_name="Gateway", constructor_name="create")
    assert find_bootstrap_call(tree, config) is not None
    assert find_bootstrap_call(tree) is None


def test_matcher_is_read_only():
    tree = parse("HttpServer.new(lambda: App.new())")
    before = ast.dump(tree)
    find_bootstrap_call(tree)
    assert ast.dump(tree) == before


def test_search_descends_into_arguments_of_unsupported_site():
    tree = parse(
        """
        def main():
            return HttpServer.new(make(HttpServer.new(lambda: App.new())))
        """
    )
    site = find_bootstrap_call(tree)
    assert site is not None
    assert ast.unparse(site.closure) == "lambda: App.new()"
    # the outer call is the unsupported one; the match is its nested argument
    outer = tree.body[0].body[0].value
    assert site.call is outer.args[0].args[0]
