"""End-to-end tests for the seder command line."""

import json

import pytest

from seder.cli.main import cli

JUNE = ["--start-date", "2024-06-01", "--end-date", "2024-06-30"]


@pytest.fixture
def run(cli_runner, temp_db, rules_path):
    """Invoke the CLI against the temporary database and rules file."""

    def _run(*args):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--rules-path", str(rules_path), *args],
        )

    return _run


def _add(run, *args):
    result = run("income", "add", *args)
    assert result.exit_code == 0, result.output
    return int(result.output.strip().rsplit(" ", 1)[1])


class TestIncomeCommands:
    def test_add_and_list(self, run):
        entry_id = _add(run, "--date", "2024-06-03", "--amount", "₪1,180", "--client", "Acme",
                        "--description", "Wedding gig")

        result = run("income", "list", *JUNE)

        assert result.exit_code == 0
        assert f"{entry_id:<6}" in result.output
        assert "Acme" in result.output
        assert "Wedding gig" in result.output
        assert "₪1,180.00" in result.output
        assert "(VAT ₪180.00)" in result.output
        assert "DONE" in result.output

    def test_add_rejects_bad_amount(self, run):
        result = run("income", "add", "--amount", "lots")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_add_rejects_unknown_category(self, run):
        result = run("income", "add", "--amount", "100", "--category", "Nope")

        assert result.exit_code == 1
        assert "Nope" in result.output

    def test_list_empty(self, run):
        result = run("income", "list", *JUNE)

        assert result.exit_code == 0
        assert "No income entries found." in result.output

    def test_status_changes(self, run):
        entry_id = _add(run, "--date", "2024-06-03", "--amount", "500")

        result = run("income", "status", str(entry_id), "sent")
        assert result.exit_code == 0
        assert f"Income entry {entry_id} is now SENT" in result.output

        result = run("income", "status", str(entry_id), "PAID")
        assert result.exit_code == 0
        assert "is now PAID" in result.output

        result = run("income", "list", *JUNE, "--status", "paid")
        assert "₪500.00" in result.output

    def test_status_unknown_entry(self, run):
        result = run("income", "status", "99", "paid")

        assert result.exit_code == 1
        assert "99" in result.output

    def test_update(self, run):
        entry_id = _add(run, "--date", "2024-06-03", "--amount", "500")

        result = run("income", "update", str(entry_id), "--amount", "750", "--client", "Globex")
        assert result.exit_code == 0
        assert f"Updated income entry {entry_id}" in result.output

        listing = run("income", "list", *JUNE).output
        assert "Globex" in listing
        assert "₪750.00" in listing

    def test_delete(self, run):
        entry_id = _add(run, "--date", "2024-06-03", "--amount", "500")

        result = run("income", "delete", str(entry_id), "--force")
        assert result.exit_code == 0
        assert f"Deleted income entry {entry_id}" in result.output

        result = run("income", "delete", str(entry_id), "--force")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestSummaryCommands:
    def test_kpi(self, run):
        _add(run, "--date", "2024-06-03", "--amount", "1180")

        result = run("summary", "kpi", "--year", "2024", "--month", "6")

        assert result.exit_code == 0
        assert "Income Summary for 2024-06:" in result.output
        assert "Ready to invoice" in result.output
        assert "  Unpaid" in result.output
        assert "₪1,180.00" in result.output

    def test_months(self, run):
        _add(run, "--date", "2024-03-03", "--amount", "100")

        result = run("summary", "months", "--year", "2024")

        assert result.exit_code == 0
        assert "Mar    has_unpaid" in result.output
        assert "Jan    empty" in result.output


class TestAnalyticsCommands:
    def test_timeline_weekly(self, run):
        _add(run, "--date", "2024-06-03", "--amount", "100")

        result = run("analytics", "timeline", *JUNE)

        assert result.exit_code == 0
        assert "Total ₪100.00 | Jobs 1" in result.output
        assert "2/6" in result.output

    def test_categories(self, run):
        run("category", "create", "Gigs")
        _add(run, "--date", "2024-06-03", "--amount", "100", "--category", "Gigs")
        _add(run, "--date", "2024-06-04", "--amount", "50")

        result = run("analytics", "categories", *JUNE)

        assert result.exit_code == 0
        assert "Gigs" in result.output
        assert "Uncategorized" in result.output

    def test_attention(self, run):
        entry_id = _add(run, "--date", "2024-06-03", "--amount", "100")
        run("income", "status", str(entry_id), "sent")

        result = run("analytics", "attention", *JUNE)

        assert result.exit_code == 0
        assert "awaiting payment" in result.output

    def test_attention_empty(self, run):
        result = run("analytics", "attention", *JUNE)

        assert "Nothing needs attention." in result.output

    def test_preset_with_dates_rejected(self, run):
        result = run("analytics", "timeline", "--preset", "this-year", *JUNE)

        assert result.exit_code == 1
        assert "cannot be combined" in result.output


class TestClientCommands:
    def test_create_and_list(self, run):
        result = run("client", "create", "Acme", "--email", "a@acme.test")
        assert result.exit_code == 0
        assert "Created client 'Acme' (ID: 1)" in result.output

        result = run("client", "create", "Acme")
        assert result.exit_code == 1

        result = run("client", "list")
        assert "Acme (ID: 1)" in result.output

    def test_duplicates_and_merge_names(self, run):
        _add(run, "--date", "2024-06-03", "--amount", "100", "--client", "Acme Ltd")
        _add(run, "--date", "2024-06-04", "--amount", "100", "--client", "acme")
        _add(run, "--date", "2024-06-05", "--amount", "100", "--client", "Globex")

        result = run("client", "duplicates")
        assert result.exit_code == 0
        assert "acme (2 entries)" in result.output

        result = run("client", "merge-names", "Acme", "Acme Ltd", "acme")
        assert result.exit_code == 0
        assert "2 entries updated" in result.output

        result = run("client", "duplicates")
        assert "No duplicate client names found." in result.output

    def test_merge_clients(self, run):
        run("client", "create", "Acme")
        run("client", "create", "ACME Inc")
        _add(run, "--date", "2024-06-03", "--amount", "100", "--client", "ACME Inc")

        result = run("client", "merge", "1", "2")
        assert result.exit_code == 0
        assert "Merged into client 1: 1 entries updated" in result.output

        listing = run("client", "list", "--all").output
        assert "ACME Inc (ID: 2) [archived]" in listing

    def test_merge_into_missing_client(self, run):
        result = run("client", "merge", "7", "1")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_sync(self, run):
        _add(run, "--date", "2024-06-03", "--amount", "100", "--client", "Acme")

        result = run("client", "sync")

        assert "Created 1 client(s), linked 1 entry(ies)" in result.output


class TestCategoryCommands:
    def test_create_list_archive(self, run):
        result = run("category", "create", "Gigs", "--color", "emerald")
        assert result.exit_code == 0
        assert "Created category 'Gigs'" in result.output

        assert "Gigs" in run("category", "list").output

        result = run("category", "archive", "1")
        assert result.exit_code == 0
        assert "Gigs" not in run("category", "list").output
        assert "[archived]" in run("category", "list", "--all").output

    def test_update_reorder_seed(self, run):
        result = run("category", "seed")
        assert result.exit_code == 0
        assert "Created 6 default categories" in result.output
        assert "nothing seeded" in run("category", "seed").output

        result = run("category", "update", "6", "--name", "Misc", "--color", "sky")
        assert result.exit_code == 0
        assert "Updated category 6" in result.output

        result = run("category", "reorder", "6", "1", "2", "3", "4", "5")
        assert result.exit_code == 0
        listing = run("category", "list").output.splitlines()
        assert listing[2].strip().startswith("Misc (ID: 6, sky/Circle)")

    def test_update_to_taken_name(self, run):
        run("category", "create", "Gigs")
        run("category", "create", "Teaching")

        result = run("category", "update", "2", "--name", "Gigs")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_delete_blocked_by_entries(self, run):
        run("category", "create", "Gigs")
        _add(run, "--date", "2024-06-03", "--amount", "100", "--category", "Gigs")

        result = run("category", "delete", "1")

        assert result.exit_code == 1
        assert "archive it instead" in result.output


class TestRulesCommands:
    def test_add_keyword_and_reset(self, run, rules_path):
        result = run("rules", "add-keyword", "work", "recording")
        assert result.exit_code == 0
        assert "Added 'recording' to work rules" in result.output
        assert rules_path.exists()

        assert "recording" in run("rules", "list").output

        result = run("rules", "reset")
        assert "reset to defaults" in result.output
        assert not rules_path.exists()
        assert "recording" not in run("rules", "list").output

    def test_list_with_bare_array_file(self, run, rules_path):
        rules_path.write_text(json.dumps([{"id": "x", "type": "work"}]), encoding="utf-8")

        result = run("rules", "list")

        assert result.exit_code == 0
        assert "work-default-title" in result.output

    def test_add_empty_keyword(self, run):
        result = run("rules", "add-keyword", "personal", " ")

        assert result.exit_code == 1


class TestCalendarCommands:
    @pytest.fixture
    def events_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "ev1", "title": "Wedding gig - Acme", "start": "2024-06-20T20:00:00",
                     "end": "2024-06-20T23:00:00"},
                    {"id": "ev2", "title": "Dentist", "start": "2024-06-21T09:00:00",
                     "end": "2024-06-21T10:00:00"},
                ]
            ),
            encoding="utf-8",
        )
        return path

    def test_classify(self, run, events_file):
        run("client", "create", "Acme")

        result = run("calendar", "classify", str(events_file))

        assert result.exit_code == 0
        lines = result.output.splitlines()
        wedding = next(line for line in lines if "Wedding gig" in line)
        dentist = next(line for line in lines if "Dentist" in line)
        assert wedding.startswith("*")
        assert "work" in wedding
        assert "Acme" in wedding
        assert dentist.startswith(" ")
        assert "personal" in dentist

    def test_import_skips_already_imported(self, run, events_file):
        result = run("calendar", "import", str(events_file))
        assert result.exit_code == 0
        assert "Imported 1 event(s)" in result.output

        result = run("calendar", "import", str(events_file))
        assert "Imported 0 event(s)" in result.output

        listing = run("income", "list", *JUNE).output
        assert "Wedding gig - Acme" in listing
        assert "Dentist" not in listing

    def test_import_chosen_event(self, run, events_file):
        result = run("calendar", "import", str(events_file), "--event-id", "ev2")

        assert "Imported 1 event(s)" in result.output
        assert "Dentist" in run("income", "list", *JUNE).output

    def test_malformed_file(self, run, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"id": "x"}), encoding="utf-8")

        result = run("calendar", "classify", str(path))

        assert result.exit_code == 1
        assert "Expected a list" in result.output
