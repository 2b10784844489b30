"""Tests for folio.routing.router — compiled trie-based route table."""

import pytest

from folio.errors import ConfigurationError, NotFound
from folio.routing.route import NamedTarget, RouteMeta, RouteRecord
from folio.routing.router import RouteTable, build_path, join_paths, parse_path


def _table(*records: RouteRecord) -> RouteTable:
    table = RouteTable(list(records))
    table.compile()
    return table


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/authors")
        assert len(segments) == 1
        assert segments[0].value == "authors"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/authors/{name}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "name"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/articles/{id:int}")
        assert segments[1].param_type == "int"

    def test_catch_all(self) -> None:
        segments = parse_path("/{path_match:path}")
        assert segments[0].param_type == "path"
        assert segments[0].param_name == "path_match"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_colon_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/articles/:id")
        assert "{param}" in str(exc_info.value)
        assert "/articles/:id" in str(exc_info.value)

    def test_rejects_angle_param(self) -> None:
        with pytest.raises(ConfigurationError, match="<param>"):
            parse_path("/share/<slug>")

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown parameter type"):
            parse_path("/articles/{id:uuid}")


class TestJoinAndBuild:
    def test_join_child(self) -> None:
        assert join_paths("/admin", "issues") == "/admin/issues"

    def test_join_empty_child_is_parent(self) -> None:
        assert join_paths("/admin", "") == "/admin"

    def test_join_from_root(self) -> None:
        assert join_paths("/", "home") == "/home"

    def test_join_absolute_child(self) -> None:
        assert join_paths("/admin", "/login") == "/login"

    def test_build_substitutes_and_encodes(self) -> None:
        assert build_path("/authors/{name}", {"name": "Ada Lovelace"}) == "/authors/Ada%20Lovelace"

    def test_build_encodes_slash_in_plain_param(self) -> None:
        assert build_path("/authors/{name}", {"name": "a/b"}) == "/authors/a%2Fb"

    def test_build_missing_param(self) -> None:
        with pytest.raises(ConfigurationError, match="Missing parameter 'id'"):
            build_path("/articles/{id}", {})


class TestMatching:
    def test_static_beats_param(self) -> None:
        table = _table(
            RouteRecord("/articles/{id}", view="ArticleContent"),
            RouteRecord("/articles/latest", view="Latest"),
        )
        assert table.match("/articles/latest").leaf.view == "Latest"
        assert table.match("/articles/42").leaf.view == "ArticleContent"

    def test_params_extracted_by_segment(self) -> None:
        table = _table(RouteRecord("/home/issue/{issue_number}", view="HomeView"))
        match = table.match("/home/issue/7")
        assert match.params == {"issue_number": "7"}

    def test_escaped_slash_stays_in_param(self) -> None:
        table = _table(
            RouteRecord("/authors/{name}", view="AuthorDetailView"),
            RouteRecord("/{path_match:path}", redirect="/home"),
        )
        match = table.match("/authors/AC%2FDC")
        assert match.leaf.view == "AuthorDetailView"
        assert match.params == {"name": "AC/DC"}

    def test_int_param_rejects_non_digit(self) -> None:
        table = _table(RouteRecord("/articles/{id:int}", view="ArticleContent"))
        with pytest.raises(NotFound):
            table.match("/articles/abc")

    def test_trailing_slash_ignored(self) -> None:
        table = _table(RouteRecord("/authors", view="AuthorView"))
        assert table.match("/authors/").leaf.view == "AuthorView"

    def test_unmatched_raises_not_found(self) -> None:
        table = _table(RouteRecord("/authors", view="AuthorView"))
        with pytest.raises(NotFound) as exc_info:
            table.match("/nowhere")
        assert exc_info.value.path == "/nowhere"

    def test_catch_all_takes_remaining_path(self) -> None:
        table = _table(
            RouteRecord("/authors", view="AuthorView"),
            RouteRecord("/{path_match:path}", redirect="/home"),
        )
        match = table.match("/no/such/page")
        assert match.params == {"path_match": "no/such/page"}
        assert match.leaf.redirect == "/home"

    def test_backtracks_to_catch_all(self) -> None:
        table = _table(
            RouteRecord("/admin", children=(RouteRecord("issues", view="IssueManager"),)),
            RouteRecord("/{path_match:path}", redirect="/home"),
        )
        assert table.match("/admin/unknown").leaf.redirect == "/home"


class TestNestedRecords:
    def _admin(self) -> RouteTable:
        return _table(
            RouteRecord(
                "/admin",
                meta=RouteMeta(requires_auth=True),
                children=(
                    RouteRecord(
                        "",
                        view="AdminLayout",
                        name="admin",
                        children=(
                            RouteRecord("", redirect="issues"),
                            RouteRecord("issues", view="IssueManager", name="admin-issues"),
                        ),
                    ),
                    RouteRecord("home", view="HomeView"),
                ),
            ),
        )

    def test_chain_outer_to_inner(self) -> None:
        match = self._admin().match("/admin/issues")
        assert [r.path for r in match.matched] == ["/admin", "", "issues"]
        assert match.matched[1].view == "AdminLayout"

    def test_empty_child_owns_parent_path(self) -> None:
        match = self._admin().match("/admin")
        assert match.leaf.redirect == "issues"
        assert match.pattern == "/admin"

    def test_relative_redirect_resolved_against_parent(self) -> None:
        nav = self._admin().resolve("/admin")
        assert nav.redirect_to == "/admin/issues"

    def test_meta_inherited_from_ancestor(self) -> None:
        nav = self._admin().resolve("/admin/home")
        assert nav.leaf.meta.requires_auth is False
        assert nav.meta.requires_auth is True

    def test_layout_name_points_at_parent_path(self) -> None:
        assert self._admin().path_for("admin") == "/admin"


class TestRegistration:
    def test_duplicate_path_rejected(self) -> None:
        table = RouteTable([RouteRecord("/authors", view="AuthorView")])
        with pytest.raises(ConfigurationError, match="Duplicate route path '/authors'"):
            table.add(RouteRecord("/authors", view="AuthorManager"))

    def test_duplicate_name_rejected(self) -> None:
        table = RouteTable([RouteRecord("/a", view="A", name="x")])
        with pytest.raises(ConfigurationError, match="Duplicate route name"):
            table.add(RouteRecord("/b", view="B", name="x"))

    def test_ambiguous_param_rejected(self) -> None:
        table = RouteTable([RouteRecord("/articles/{id}", view="A")])
        with pytest.raises(ConfigurationError, match="Ambiguous parameter"):
            table.add(RouteRecord("/articles/{slug}/comments", view="B"))

    def test_add_after_compile(self) -> None:
        table = _table(RouteRecord("/a", view="A"))
        with pytest.raises(RuntimeError, match="after compilation"):
            table.add(RouteRecord("/b", view="B"))

    def test_group_without_view_is_not_matchable(self) -> None:
        table = _table(RouteRecord("/admin", children=(RouteRecord("issues", view="I"),)))
        with pytest.raises(NotFound):
            table.match("/admin")

    def test_routes_lists_terminals(self) -> None:
        table = _table(
            RouteRecord("/a", view="A"),
            RouteRecord("/b", children=(RouteRecord("c", view="C"),)),
        )
        assert [m.pattern for m in table.routes] == ["/a", "/b/c"]
        assert len(table.records) == 2


class TestResolve:
    def test_splits_query_and_fragment(self) -> None:
        table = _table(RouteRecord("/articles/{id}", view="ArticleContent"))
        nav = table.resolve("/articles/42?ref=home#comments")
        assert nav.path == "/articles/42"
        assert nav.params == {"id": "42"}
        assert nav.query["ref"] == "home"
        assert nav.fragment == "comments"
        assert nav.full_path == "/articles/42?ref=home#comments"

    def test_named_target(self) -> None:
        table = _table(RouteRecord("/authors/{name}", view="AuthorDetailView", name="author-detail"))
        nav = table.resolve(NamedTarget("author-detail", params={"name": "li"}, fragment="bio"))
        assert nav.path == "/authors/li"
        assert nav.name == "author-detail"
        assert nav.full_path == "/authors/li#bio"

    def test_named_target_query_is_encoded(self) -> None:
        table = _table(RouteRecord("/login", view="LoginView", name="login"))
        nav = table.resolve(NamedTarget("login", query={"redirect": "/admin/issues"}))
        assert nav.full_path == "/login?redirect=%2Fadmin%2Fissues"

    def test_named_target_with_name_param(self) -> None:
        table = _table(RouteRecord("/authors/{name}", view="AuthorDetailView", name="author-detail"))
        nav = table.resolve(NamedTarget("author-detail", params={"name": "AC/DC"}))
        assert nav.path == "/authors/AC%2FDC"
        assert nav.params == {"name": "AC/DC"}

    def test_unknown_name(self) -> None:
        table = _table(RouteRecord("/a", view="A"))
        with pytest.raises(ConfigurationError, match="No route named"):
            table.resolve(NamedTarget("missing"))

    def test_redirect_params_substituted(self) -> None:
        table = _table(
            RouteRecord("/issue/{n}", redirect="/home/issue/{n}"),
            RouteRecord("/home/issue/{n}", view="HomeView"),
        )
        assert table.resolve("/issue/3").redirect_to == "/home/issue/3"
