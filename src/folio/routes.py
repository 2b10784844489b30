"""The magazine's route table.

Public reading views live at the top level. The back-office lives under
``/admin``: a layout record wraps the managers and the editor, and a
mirrored set of reading views lets editors browse the site without
leaving editor mode.
"""

from folio.routing import RouteMeta, RouteRecord, RouteTable

ADMIN = RouteMeta(requires_auth=True)


def reading_records() -> list[RouteRecord]:
    """Public views, in declaration order."""
    return [
        RouteRecord("/", redirect="/home"),
        RouteRecord("/home", view="HomeView", name="home"),
        RouteRecord("/home/issue/{issue_number:int}", view="HomeView", name="home-issue", props=True),
        RouteRecord("/mission", view="MissionView", name="mission"),
        RouteRecord("/authors", view="AuthorView", name="authors"),
        RouteRecord("/authors/{name}", view="AuthorDetailView", name="author-detail"),
        RouteRecord("/articles", view="ArticleListView", name="article-list"),
        RouteRecord("/articles/{id}", view="ArticleContent", name="article-detail"),
        RouteRecord("/preview", view="ArticleContent", name="article-preview"),
        RouteRecord("/submit", view="SubmissionView", name="submit"),
        RouteRecord("/submit/issue/{issue_number:int}", view="SubmissionView", name="submit-issue"),
        RouteRecord("/search", view="SearchView", name="search"),
        RouteRecord("/login", view="LoginView", name="login"),
    ]


def admin_record() -> RouteRecord:
    """The ``/admin`` subtree.

    ``/admin/articles`` and ``/admin/authors`` belong to the managers, so
    the mirrored reading views only cover the remaining paths.
    """
    managers = RouteRecord(
        "",
        view="AdminLayout",
        name="admin",
        children=(
            RouteRecord("", redirect="issues"),
            RouteRecord("issues", view="IssueManager", name="admin-issues"),
            RouteRecord("articles", view="ArticleListManager", name="admin-articles"),
            RouteRecord("authors", view="AuthorManager", name="admin-authors"),
            RouteRecord("editor", view="EditorView", name="admin-editor-new"),
            RouteRecord("editor/{id}", view="EditorView", name="admin-editor-edit"),
        ),
    )
    mirrors = (
        RouteRecord("home", view="HomeView"),
        RouteRecord("home/issue/{issue_number:int}", view="HomeView", props=True),
        RouteRecord("mission", view="MissionView"),
        RouteRecord("articles/{id}", view="ArticleContent"),
        RouteRecord("submit", view="SubmissionView"),
        RouteRecord("submit/issue/{issue_number:int}", view="SubmissionView"),
    )
    return RouteRecord("/admin", meta=ADMIN, children=(managers, *mirrors))


def build_route_table() -> RouteTable:
    """Build and compile the full magazine route table."""
    table = RouteTable(reading_records())
    table.add(admin_record())
    # Anything else falls back to the home page
    table.add(RouteRecord("/{path_match:path}", redirect="/home"))
    table.compile()
    return table
