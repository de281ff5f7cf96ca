# ABOUTME: End-to-end tests for the Shelves CLI.
# ABOUTME: Runs commands through Click's CliRunner against a SQLite store in tmp_path.

import re
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner, Result

from shelves.catalog.http import CatalogHttpClient
from shelves.cli import cli
from shelves.cli.commands import catalog_cmd
from tests.fixtures.openlibrary_responses import search_response


@pytest.fixture(autouse=True)
def _no_gemini_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep insights and summaries on the offline path."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


def run(store_path: Path, *args: str) -> Result:
    """Invoke the CLI with --store appended to the subcommand's arguments.

    COLUMNS is widened so Rich tables do not fold cell text.
    """
    return CliRunner().invoke(cli, [*args, "--store", str(store_path)], env={"COLUMNS": "200"})


class TestCliBasics:
    """E2e tests for the root command group."""

    def test_help_lists_commands(self) -> None:
        """--help names the main commands."""
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("ls", "checkout", "workspace", "catalog", "insights"):
            assert name in result.output

    def test_version(self) -> None:
        """--version reports the package version."""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCliBooks:
    """E2e tests for listing and maintaining the global library."""

    def test_ls_seeds_library(self, store_path: Path) -> None:
        """The first listing shows the seeded books."""
        result = run(store_path, "ls")
        assert result.exit_code == 0
        assert "Dune" in result.output
        assert "4 book(s)" in result.output

    def test_ls_borrowed_filter(self, store_path: Path) -> None:
        """--borrowed shows only books out on loan."""
        result = run(store_path, "ls", "--borrowed")
        assert result.exit_code == 0
        assert "1 book(s)" in result.output

    def test_add_search_edit_rm(self, store_path: Path) -> None:
        """Full lifecycle: add, search, info, edit, rm."""
        result = run(
            store_path,
            "add",
            "--title", "Solaris",
            "--author", "Stanislaw Lem",
            "--genre", "Science Fiction",
            "--year", "1961",
            "--tags", "ocean, contact",
        )
        assert result.exit_code == 0
        match = re.search(r"as (book-[0-9a-f]+)\.", result.output)
        assert match is not None
        book_id = match.group(1)

        result = run(store_path, "search", "ocean")
        assert result.exit_code == 0
        assert "1 match(es)" in result.output

        result = run(store_path, "edit", book_id, "--year", "1962")
        assert result.exit_code == 0
        assert "Updated Solaris" in result.output

        result = run(store_path, "info", book_id)
        assert result.exit_code == 0
        assert "1962" in result.output
        assert "ocean, contact" in result.output

        result = run(store_path, "rm", book_id)
        assert result.exit_code == 0

        result = run(store_path, "info", book_id)
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_without_fields(self, store_path: Path) -> None:
        """edit with no options changes nothing."""
        result = run(store_path, "edit", "1")
        assert result.exit_code == 0
        assert "Nothing to change" in result.output

    def test_search_no_match(self, store_path: Path) -> None:
        """A query with no hits says so."""
        result = run(store_path, "search", "zzzz")
        assert result.exit_code == 0
        assert "No books matching 'zzzz'" in result.output


class TestCliLoans:
    """E2e tests for the borrowing workflow."""

    def test_checkout_checkin(self, store_path: Path) -> None:
        """A book goes out with a due date and comes back."""
        result = run(store_path, "checkout", "1", "--borrower", "Ann", "--due", "2030-01-15")
        assert result.exit_code == 0
        assert "to Ann, due 2030-01-15" in result.output

        result = run(store_path, "ls", "--borrowed")
        assert "2 book(s)" in result.output

        result = run(store_path, "loans", "--active")
        assert result.exit_code == 0
        assert "Ann" in result.output

        result = run(store_path, "checkin", "1")
        assert result.exit_code == 0
        assert "Checked in" in result.output

        result = run(store_path, "loans", "--active")
        assert "No borrowing records" in result.output

    def test_checkout_default_borrower(self, store_path: Path) -> None:
        """Without --borrower the acting user borrows the book."""
        result = run(store_path, "checkout", "3", "--user", "zoe")
        assert result.exit_code == 0
        assert "to zoe" in result.output

    def test_checkout_bad_date(self, store_path: Path) -> None:
        """An unparseable due date is a usage error."""
        result = run(store_path, "checkout", "1", "--due", "next week")
        assert result.exit_code == 2

    def test_checkout_missing_book(self, store_path: Path) -> None:
        """Checking out an unknown book fails."""
        result = run(store_path, "checkout", "nope")
        assert result.exit_code == 1

    def test_overdue_lists_seeded_loan(self, store_path: Path) -> None:
        """The seeded loan is long past due."""
        result = run(store_path, "overdue")
        assert result.exit_code == 0
        assert "Nothing is overdue" not in result.output


class TestCliFavorites:
    """E2e tests for `shelves fav`."""

    def test_toggle_and_list(self, store_path: Path) -> None:
        """Toggling adds then removes a favorite."""
        result = run(store_path, "fav", "toggle", "3", "--user", "ann")
        assert result.exit_code == 0
        assert "Added 3 to favorites" in result.output

        result = run(store_path, "fav", "ls", "--user", "ann")
        assert "1 favorite(s)" in result.output

        result = run(store_path, "fav", "ls", "--user", "bob")
        assert "No favorites yet" in result.output

        result = run(store_path, "fav", "toggle", "3", "--user", "ann")
        assert "Removed 3 from favorites" in result.output

    def test_toggle_unknown_book(self, store_path: Path) -> None:
        """Only existing books can be favorited."""
        result = run(store_path, "fav", "toggle", "nope")
        assert result.exit_code == 1


class TestCliInsights:
    """E2e tests for stats, insights, recommend, and summary."""

    def test_stats(self, store_path: Path) -> None:
        """Counts reflect the seeded library."""
        result = run(store_path, "stats")
        assert result.exit_code == 0
        assert "Total: 4" in result.output
        assert "Available: 3" in result.output
        assert "Borrowed: 1" in result.output
        assert "50%" in result.output

    def test_insights_rule_based(self, store_path: Path) -> None:
        """Without an API key insights are rule-based."""
        result = run(store_path, "insights")
        assert result.exit_code == 0
        assert "rule-based" in result.output
        assert "Library health:" in result.output

    def test_recommend_by_genre(self, store_path: Path) -> None:
        """Recommendations respect --genre."""
        result = run(store_path, "recommend", "--genre", "Fantasy")
        assert result.exit_code == 0
        assert "Fantasy" in result.output
        assert "Fiction" not in result.output

    def test_recommend_unknown_book(self, store_path: Path) -> None:
        """--book must name a book in the collection."""
        result = run(store_path, "recommend", "--book", "nope")
        assert result.exit_code == 1

    def test_summary_fallback(self, store_path: Path) -> None:
        """Without an API key the canned genre summary is shown."""
        result = run(store_path, "summary", "3")
        assert result.exit_code == 0
        assert "imaginative science fiction tale" in result.output


class TestCliConfig:
    """E2e tests for `shelves config`."""

    def test_set_and_show_api_key(self, store_path: Path) -> None:
        """A saved key is reported as set."""
        result = run(store_path, "config", "show")
        assert "Gemini API key: not set" in result.output

        result = run(store_path, "config", "set-api-key", "abc123")
        assert result.exit_code == 0
        assert "API key saved" in result.output

        result = run(store_path, "config", "show")
        assert "Gemini API key: set" in result.output

    def test_blank_api_key(self, store_path: Path) -> None:
        """A blank key is rejected."""
        result = run(store_path, "config", "set-api-key", "  ")
        assert result.exit_code == 1


class TestCliWorkspaces:
    """E2e tests for `shelves workspace` and workspace-scoped book commands."""

    def _create(self, store_path: Path) -> str:
        result = run(store_path, "workspace", "create", "Book Club", "--user", "olive")
        assert result.exit_code == 0
        match = re.search(r"\((workspace-[0-9a-f]+)\)", result.output)
        assert match is not None
        return match.group(1)

    def _invite(self, store_path: Path, workspace_id: str, role: str) -> str:
        result = run(
            store_path,
            "workspace", "invite", workspace_id, "sam@example.com",
            "--role", role,
            "--user", "olive",
        )
        assert result.exit_code == 0
        match = re.search(r"Token: (\S+)", result.output)
        assert match is not None
        return match.group(1)

    def test_invite_accept_promote(self, store_path: Path) -> None:
        """Full lifecycle: invite, accept, denied add, promote, add."""
        workspace_id = self._create(store_path)
        token = self._invite(store_path, workspace_id, "viewer")

        result = run(store_path, "workspace", "accept", token, "--user", "sam")
        assert result.exit_code == 0
        assert "as viewer" in result.output

        add_args = ["add", "--title", "Piranesi", "--author", "Susanna Clarke"]
        add_args += ["--genre", "Fantasy", "--year", "2020", "-w", workspace_id, "--user", "sam"]
        result = run(store_path, *add_args)
        assert result.exit_code == 1
        assert "Cannot add books" in result.output

        result = run(store_path, "workspace", "role", workspace_id, "sam", "librarian",
                     "--user", "olive")
        assert result.exit_code == 0
        assert "sam is now librarian" in result.output

        result = run(store_path, *add_args)
        assert result.exit_code == 0
        assert "Added Piranesi" in result.output

        result = run(store_path, "ls", "-w", workspace_id, "--user", "sam")
        assert "5 book(s)" in result.output

        result = run(store_path, "workspace", "activity", workspace_id, "--user", "olive")
        assert result.exit_code == 0
        assert "joined" in result.output
        assert "invited" in result.output

        result = run(store_path, "workspace", "members", workspace_id, "--user", "olive")
        assert result.exit_code == 0
        assert "sam" in result.output

    def test_invitation_single_use(self, store_path: Path) -> None:
        """An accepted token cannot be used again."""
        workspace_id = self._create(store_path)
        token = self._invite(store_path, workspace_id, "member")
        assert run(store_path, "workspace", "accept", token, "--user", "sam").exit_code == 0

        result = run(store_path, "workspace", "accept", token, "--user", "tom")
        assert result.exit_code == 1
        assert "invalid, used, or expired" in result.output

    def test_non_member_is_denied(self, store_path: Path) -> None:
        """Outsiders cannot list a workspace's books or members."""
        workspace_id = self._create(store_path)
        result = run(store_path, "ls", "-w", workspace_id, "--user", "mallory")
        assert result.exit_code == 1
        assert "lacks view_books" in result.output

        result = run(store_path, "workspace", "members", workspace_id, "--user", "mallory")
        assert result.exit_code == 1

    def test_unknown_workspace(self, store_path: Path) -> None:
        """Naming a missing workspace is an error."""
        result = run(store_path, "ls", "-w", "workspace-missing")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_borrowing_disabled(self, store_path: Path) -> None:
        """Check-outs fail once borrowing is turned off."""
        workspace_id = self._create(store_path)
        result = run(store_path, "workspace", "update", workspace_id, "--no-borrowing",
                     "--user", "olive")
        assert result.exit_code == 0

        result = run(store_path, "checkout", f"{workspace_id}-1", "-w", workspace_id,
                     "--user", "olive")
        assert result.exit_code == 1
        assert "Borrowing is disabled" in result.output

    def test_workspace_checkout_uses_loan_period(self, store_path: Path) -> None:
        """The workspace's loan period sets the default due date."""
        workspace_id = self._create(store_path)
        run(store_path, "workspace", "update", workspace_id, "--max-borrow-days", "3",
            "--user", "olive")
        result = run(store_path, "checkout", f"{workspace_id}-1", "-w", workspace_id,
                     "--user", "olive")
        assert result.exit_code == 0
        assert "to olive, due" in result.output

    def test_only_owner_deletes(self, store_path: Path) -> None:
        """Members cannot delete the workspace; the owner can."""
        workspace_id = self._create(store_path)
        token = self._invite(store_path, workspace_id, "admin")
        run(store_path, "workspace", "accept", token, "--user", "sam")

        result = run(store_path, "workspace", "rm", workspace_id, "--user", "sam")
        assert result.exit_code == 1
        assert "Only the owner" in result.output

        result = run(store_path, "workspace", "rm", workspace_id, "--user", "olive")
        assert result.exit_code == 0

        result = run(store_path, "workspace", "rm", workspace_id, "--user", "olive")
        assert result.exit_code == 1

    def test_owner_cannot_leave(self, store_path: Path) -> None:
        """The owner is refused when leaving their own workspace."""
        workspace_id = self._create(store_path)
        result = run(store_path, "workspace", "leave", workspace_id, "--user", "olive")
        assert result.exit_code == 1

    def test_ls_creates_personal_workspace(self, store_path: Path) -> None:
        """A user with no workspaces gets a personal one."""
        result = run(store_path, "workspace", "ls", "--user", "ann")
        assert result.exit_code == 0
        assert "ann's Library" in result.output
        assert "owner" in result.output


def _serve(monkeypatch: pytest.MonkeyPatch, status: int, payload: dict | None = None) -> None:
    """Route the catalog commands' HTTP client to a canned Open Library reply."""
    transport = httpx.MockTransport(lambda request: httpx.Response(status, json=payload))
    monkeypatch.setattr(
        catalog_cmd,
        "CatalogHttpClient",
        lambda timeout: CatalogHttpClient(timeout=timeout, transport=transport),
    )


class TestCliCatalog:
    """E2e tests for `shelves catalog`."""

    def test_sync_replaces_library(
        self, store_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """sync imports the fetched books in place of the seeded ones."""
        _serve(monkeypatch, 200, search_response(30))
        result = run(store_path, "catalog", "sync", "--seed", "1")
        assert result.exit_code == 0
        assert "Imported 30 books into global library" in result.output

        result = run(store_path, "ls")
        assert "30 book(s)" in result.output

    def test_sync_denied_for_outsider(
        self, store_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Non-members cannot replace a workspace catalog."""
        _serve(monkeypatch, 200, search_response(30))
        result = run(store_path, "workspace", "create", "Club", "--user", "olive")
        match = re.search(r"\((workspace-[0-9a-f]+)\)", result.output)
        assert match is not None
        result = run(store_path, "catalog", "sync", "-w", match.group(1), "--user", "mallory")
        assert result.exit_code == 1
        assert "lacks manage_books" in result.output

    def test_search_falls_back_offline(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A failing Open Library still lists the built-in catalog."""
        _serve(monkeypatch, 500)
        result = CliRunner().invoke(cli, ["catalog", "search", "dune"], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        assert "45 result(s)" in result.output
