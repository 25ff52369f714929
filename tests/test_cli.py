"""Tests for the mfn command line interface."""

import pytest

from moneyfornothing.cli.main import cli


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "mfn.db")


@pytest.fixture
def invoke(cli_runner, db_path):
    """Run mfn against a temporary database on 2025-12-15."""

    def run(*args, today="2025-12-15", input=None):
        base = ["--db-path", db_path, "--today", today]
        return cli_runner.invoke(cli, base + list(args), input=input)

    return run


def test_help_does_not_touch_storage(cli_runner, db_path):
    result = cli_runner.invoke(cli, ["--db-path", db_path, "--help"])

    assert result.exit_code == 0
    assert "Money For Nothing" in result.output


def test_first_run_lists_paychecks(invoke):
    result = invoke("income", "list")

    assert result.exit_code == 0
    assert "Paycheck 1" in result.output
    assert "Paycheck 2" in result.output
    assert "Total this month: $0.00" in result.output


def test_income_commands(invoke):
    assert invoke("income", "add", "Side Gig", "400").exit_code == 0

    result = invoke("income", "set-current", "paycheck 1", "1,800")
    assert result.exit_code == 0
    assert "'Paycheck 1' this month: $1,800.00" in result.output

    result = invoke("income", "set-default", "Paycheck 1", "2500")
    assert result.exit_code == 0

    result = invoke("income", "rename", "side gig", "Freelance")
    assert result.exit_code == 0
    assert "Renamed income to 'Freelance'" in result.output

    result = invoke("income", "list")
    assert "Total this month: $2,200.00" in result.output
    assert "Default total:    $2,900.00" in result.output

    result = invoke("income", "reset")
    assert result.exit_code == 0
    assert "$2,900.00" in result.output


def test_income_add_duplicate(invoke):
    invoke("income", "add", "Side Gig", "400")
    result = invoke("income", "add", "SIDE GIG", "100")

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_income_add_invalid_amount(invoke):
    result = invoke("income", "add", "Side Gig", "abc")

    assert result.exit_code == 1
    assert "Error: default_amount: Amount must be a number" in result.output


def test_paycheck_delete_blocked(invoke):
    result = invoke("income", "delete", "Paycheck 1", "--yes")

    assert result.exit_code == 1
    assert "protected" in result.output


def test_income_delete(invoke):
    invoke("income", "add", "Side Gig", "400")

    result = invoke("income", "delete", "Side Gig", input="n\n")
    assert "Deletion cancelled." in result.output

    result = invoke("income", "delete", "Side Gig", input="y\n")
    assert result.exit_code == 0
    assert "Deleted income 'Side Gig'" in result.output
    assert "Side Gig" not in invoke("income", "list").output


def test_unknown_record(invoke):
    result = invoke("bill", "toggle", "Water")

    assert result.exit_code == 1
    assert "Bill 'Water' not found" in result.output


def test_bill_commands(invoke):
    assert invoke("bill", "list").output.strip() == "No bills found."

    invoke("bill", "add", "Rent", "1200")
    invoke("bill", "add", "Phone", "50")

    result = invoke("bill", "toggle", "rent")
    assert "Marked 'Rent' as paid" in result.output

    result = invoke("bill", "update", "Phone", "--amount", "55.50")
    assert "Updated bill 'Phone' ($55.50)" in result.output

    result = invoke("bill", "list")
    assert "[x]" in result.output
    assert "Paid $1,200.00 of $1,255.50 (96%)" in result.output

    result = invoke("bill", "delete", "Phone", "--yes")
    assert result.exit_code == 0
    assert "Phone" not in invoke("bill", "list").output


def test_bill_update_without_changes(invoke):
    invoke("bill", "add", "Rent", "1200")
    result = invoke("bill", "update", "Rent")

    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_savings_commands(invoke):
    invoke("savings", "add", "Emergency", "4000")
    invoke("savings", "add", "Vacation")

    result = invoke("savings", "update", "vacation", "--amount", "1000")
    assert result.exit_code == 0

    result = invoke("savings", "list")
    assert "Total savings: $5,000.00" in result.output

    result = invoke("savings", "delete", "Vacation", "--yes")
    assert result.exit_code == 0


def test_summary(invoke):
    invoke("income", "set-current", "Paycheck 1", "2000")
    invoke("bill", "add", "Rent", "1200")

    result = invoke("summary")

    assert result.exit_code == 0
    assert "December 2025" in result.output
    assert "$800.00" in result.output
    assert "0%" in result.output


def test_automatic_rollover(invoke):
    invoke("income", "set-default", "Paycheck 1", "2500")
    invoke("income", "set-current", "Paycheck 1", "1800")
    invoke("bill", "add", "Rent", "1200")
    invoke("bill", "toggle", "Rent")
    invoke("savings", "add", "Emergency", "5000")

    result = invoke("history", today="2026-01-02")

    assert result.exit_code == 0
    assert "New month" in result.output
    assert "December 2025" in result.output
    assert "$5,000.00" in result.output

    assert "[ ]" in invoke("bill", "list", today="2026-01-02").output
    again = invoke("history", today="2026-01-20")
    assert "New month" not in again.output
    assert again.output.count("December 2025") == 1


def test_manual_rollover(invoke):
    invoke("summary")

    result = invoke("--no-auto-rollover", "rollover", today="2026-01-02")
    assert "Rollover due" in result.output

    result = invoke("--no-auto-rollover", "rollover", "--run", today="2026-01-02")
    assert "Started January 2026" in result.output

    result = invoke("--no-auto-rollover", "rollover", today="2026-01-02")
    assert "Up to date" in result.output


def test_history_empty(invoke):
    assert "No savings history yet" in invoke("history").output


def test_export_and_import(invoke, tmp_path):
    invoke("bill", "add", "Rent", "1200")
    invoke("savings", "add", "Emergency", "5000")

    result = invoke("export", str(tmp_path))
    assert result.exit_code == 0
    export_path = tmp_path / "moneyfornothing-2025-12.csv"
    assert export_path.exists()

    invoke("reset-data", "--yes")
    assert "Rent" not in invoke("bill", "list").output

    result = invoke("import", str(export_path), "--yes")
    assert result.exit_code == 0
    assert "Import complete" in result.output
    assert "Rent" in invoke("bill", "list").output


def test_import_drops_duplicate_bill_names(invoke, tmp_path):
    path = tmp_path / "bills.csv"
    path.write_text("=== BILLS ===\nRent,100,No\nrent,200,Yes\nPhone,abc,No\n", encoding="utf-8")

    assert invoke("import", str(path), "--yes").exit_code == 0
    result = invoke("bill", "toggle", "rent")

    assert result.exit_code == 0
    assert "Marked 'Rent' as paid" in result.output
    assert "Phone" not in invoke("bill", "list").output


def test_export_to_stdout(invoke):
    result = invoke("export", "--stdout")
    assert "=== INCOME ===" in result.output


def test_import_cancelled(invoke, tmp_path):
    invoke("export", str(tmp_path))
    path = tmp_path / "moneyfornothing-2025-12.csv"

    result = invoke("import", str(path), input="n\n")
    assert "Import cancelled." in result.output


def test_import_failure(invoke, tmp_path):
    invoke("bill", "add", "Rent", "1200")
    path = tmp_path / "junk.csv"
    path.write_text("nothing useful here\n", encoding="utf-8")

    result = invoke("import", str(path), "--yes")

    assert result.exit_code == 1
    assert "Import failed" in result.output
    assert "Rent" in invoke("bill", "list").output


def test_setup_commands(invoke):
    assert "Setup not completed." in invoke("setup", "status").output
    invoke("setup", "complete")
    assert "Setup complete." in invoke("setup", "status").output
    result = invoke("setup", "restart")
    assert "Your data has been kept" in result.output
    assert "Setup not completed." in invoke("setup", "status").output


def test_reset_data_requires_confirmation(invoke):
    invoke("bill", "add", "Rent", "1200")

    result = invoke("reset-data", input="n\n")
    assert "Reset cancelled." in result.output
    assert "Rent" in invoke("bill", "list").output


def test_json_backend(cli_runner, tmp_path):
    path = tmp_path / "data.json"
    args = ["--backend", "json", "--db-path", str(path), "--today", "2025-12-15"]

    result = cli_runner.invoke(cli, args + ["bill", "add", "Rent", "1200"])
    assert result.exit_code == 0
    assert path.exists()

    result = cli_runner.invoke(cli, args + ["bill", "list"])
    assert "Rent" in result.output


def test_invalid_today(cli_runner, db_path):
    result = cli_runner.invoke(cli, ["--db-path", db_path, "--today", "someday", "summary"])

    assert result.exit_code == 2
    assert "--today" in result.output
