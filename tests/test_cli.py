"""End-to-end tests for the spendlog command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendlog.cli import app
from spendlog.config import get_config_path, save_config
from spendlog.store import get_all_expenses, get_db_path

runner = CliRunner()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def initialized(home: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return home


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, home: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (home / "data" / "spendlog" / "spendlog.db").exists()
        assert (home / "config" / "spendlog" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should fail without --force when files exist."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force(self, initialized: Path) -> None:
        """Should succeed again with --force."""
        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0


class TestAdd:
    """Tests for the add command."""

    def test_requires_database(self, home: Path) -> None:
        """Should tell the user to run init first."""
        result = runner.invoke(app, ["add", "5", "Coffee"])

        assert result.exit_code == 1
        assert "spendlog init" in result.output

    def test_adds_expense(self, initialized: Path) -> None:
        """Should store the expense with a normalized category."""
        result = runner.invoke(app, ["add", "25.50", "Lunch", "--category", "food", "--date", "15/01/2025"])

        assert result.exit_code == 0, result.output
        expenses = get_all_expenses(get_db_path())
        assert len(expenses) == 1
        assert str(expenses[0].amount) == "25.50"
        assert expenses[0].category == "Food"
        assert "15/01/2025" in result.output

    def test_default_category(self, initialized: Path) -> None:
        """Should use the configured default category."""
        runner.invoke(app, ["add", "3", "Stamps"])

        assert get_all_expenses(get_db_path())[0].category == "Other"

    def test_rejects_invalid_amount(self, initialized: Path) -> None:
        """Should refuse non-positive amounts and store nothing."""
        result = runner.invoke(app, ["add", "--", "-5", "Refund"])

        assert result.exit_code == 1
        assert "Enter a valid amount" in result.output
        assert get_all_expenses(get_db_path()) == []

    def test_rejects_amount_too_large_to_store(self, initialized: Path) -> None:
        """Should refuse amounts whose cents overflow the database column."""
        result = runner.invoke(app, ["add", "100000000000000000", "Car"])

        assert result.exit_code == 1
        assert "Amount is too large" in result.output
        assert get_all_expenses(get_db_path()) == []

    def test_rejects_blank_description(self, initialized: Path) -> None:
        """Should require a description."""
        result = runner.invoke(app, ["add", "5", " "])

        assert result.exit_code == 1
        assert "Enter a description" in result.output

    def test_rejects_invalid_date(self, initialized: Path) -> None:
        """Should report unparseable dates."""
        result = runner.invoke(app, ["add", "5", "Coffee", "--date", "not a date"])

        assert result.exit_code == 1
        assert "Invalid date format" in result.output


class TestEditDeleteShow:
    """Tests for edit, delete, show and clear."""

    def test_edit(self, initialized: Path) -> None:
        """Should update only the given fields."""
        runner.invoke(app, ["add", "10", "Bus", "-c", "Transport"])
        expense_id = get_all_expenses(get_db_path())[0].id

        result = runner.invoke(app, ["edit", str(expense_id), "--amount", "12.75"])

        assert result.exit_code == 0, result.output
        expense = get_all_expenses(get_db_path())[0]
        assert str(expense.amount) == "12.75"
        assert expense.description == "Bus"
        assert expense.category == "Transport"

    def test_edit_missing(self, initialized: Path) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["edit", "99", "--amount", "1"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_show(self, initialized: Path) -> None:
        """Should print the expense."""
        runner.invoke(app, ["add", "7.20", "Museum", "-c", "Education"])
        expense_id = get_all_expenses(get_db_path())[0].id

        result = runner.invoke(app, ["show", str(expense_id)])

        assert result.exit_code == 0
        assert "Museum" in result.output
        assert "7.20" in result.output

    def test_delete_with_yes(self, initialized: Path) -> None:
        """Should delete without prompting."""
        runner.invoke(app, ["add", "1", "Gum"])
        expense_id = get_all_expenses(get_db_path())[0].id

        result = runner.invoke(app, ["delete", str(expense_id), "--yes"])

        assert result.exit_code == 0
        assert get_all_expenses(get_db_path()) == []

    def test_delete_declined(self, initialized: Path) -> None:
        """Should keep the expense when the prompt is declined."""
        runner.invoke(app, ["add", "1", "Gum"])
        expense_id = get_all_expenses(get_db_path())[0].id

        result = runner.invoke(app, ["delete", str(expense_id)], input="n\n")

        assert result.exit_code == 1
        assert len(get_all_expenses(get_db_path())) == 1

    def test_clear(self, initialized: Path) -> None:
        """Should remove every expense after confirmation."""
        runner.invoke(app, ["add", "1", "Gum"])
        runner.invoke(app, ["add", "2", "Tea"])

        result = runner.invoke(app, ["clear"], input="y\n")

        assert result.exit_code == 0
        assert "Deleted 2 expenses" in result.output
        assert get_all_expenses(get_db_path()) == []


class TestListAndSummary:
    """Tests for list, summary and categories."""

    @pytest.fixture
    def populated(self, initialized: Path) -> Path:
        runner.invoke(app, ["add", "25.50", "Lunch", "-c", "Food", "-d", "2025-01-10"])
        runner.invoke(app, ["add", "15.00", "Taxi", "-c", "Transport", "-d", "2025-01-20"])
        runner.invoke(app, ["add", "50.00", "Cinema", "-c", "Entertainment", "-d", "2025-02-01"])
        return initialized

    def test_list(self, populated: Path) -> None:
        """Should list every expense with the total."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Lunch" in result.output
        assert "Cinema" in result.output
        assert "90.50" in result.output

    def test_list_by_month(self, populated: Path) -> None:
        """Should only list the requested month."""
        result = runner.invoke(app, ["list", "--month", "2025-01"])

        assert result.exit_code == 0
        assert "Lunch" in result.output
        assert "Cinema" not in result.output
        assert "40.50" in result.output

    def test_list_by_category(self, populated: Path) -> None:
        """Should only list the requested category."""
        result = runner.invoke(app, ["list", "--category", "transport"])

        assert "Taxi" in result.output
        assert "Lunch" not in result.output

    def test_list_bad_month(self, populated: Path) -> None:
        """Should reject malformed months."""
        result = runner.invoke(app, ["list", "--month", "2025-13"])

        assert result.exit_code == 1
        assert "Invalid month" in result.output

    def test_list_limit(self, populated: Path) -> None:
        """Should show at most limit expenses."""
        result = runner.invoke(app, ["list", "--limit", "1"])

        assert result.exit_code == 0
        assert "showing 1 of 3" in result.output

    def test_list_rejects_negative_limit(self, populated: Path) -> None:
        """Should treat a negative limit as a usage error."""
        result = runner.invoke(app, ["list", "--limit", "-1"])

        assert result.exit_code == 2
        assert "Lunch" not in result.output

    def test_list_empty(self, initialized: Path) -> None:
        """Should say when there is nothing to show."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No expenses found" in result.output

    def test_summary(self, populated: Path) -> None:
        """Should show statistics and the category breakdown."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "90.50" in result.output
        assert "30.17" in result.output
        assert "Entertainment" in result.output
        assert "Transport" in result.output

    def test_summary_shows_top_category_total(self, populated: Path) -> None:
        """Should show the amount spent in the top category."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        top_total = next(line for line in result.output.splitlines() if "Top total:" in line)
        assert "50.00" in top_total

    def test_summary_sort_alpha(self, populated: Path) -> None:
        """Should list categories alphabetically."""
        result = runner.invoke(app, ["summary", "--sort", "alpha", "--no-chart"])

        assert result.exit_code == 0, result.output
        output = result.output
        assert output.index("Entertainment:") < output.index("Food:") < output.index("Transport:")

    def test_summary_rejects_unknown_sort(self, populated: Path) -> None:
        """Should refuse sort keys other than value and alpha."""
        result = runner.invoke(app, ["summary", "--sort", "bogus"])

        assert result.exit_code == 1
        assert "Invalid sort" in result.output
        assert "Spending by category" not in result.output

    def test_summary_for_month(self, populated: Path) -> None:
        """Should aggregate only the requested month."""
        result = runner.invoke(app, ["summary", "--month", "2025-02", "--no-chart"])

        assert result.exit_code == 0
        assert "50.00" in result.output
        assert "Lunch" not in result.output
        assert "Food" not in result.output

    def test_summary_this_month(self, initialized: Path) -> None:
        """Should include an expense added just now."""
        runner.invoke(app, ["add", "8", "Sandwich", "-c", "Food"])

        result = runner.invoke(app, ["summary", "--this-month"])

        assert result.exit_code == 0
        assert "Food" in result.output
        assert "8.00" in result.output

    def test_summary_empty(self, initialized: Path) -> None:
        """Should show zeros and N/A with no expenses."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0
        assert "N/A" in result.output
        assert "No expenses recorded yet" in result.output

    def test_categories(self, home: Path) -> None:
        """Should list the suggested categories."""
        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "Entertainment" in result.output
        assert "#FFBE0B" in result.output


class TestDatabaseErrors:
    """Tests for commands reading from a database they cannot query."""

    @pytest.fixture
    def broken(self, home: Path) -> Path:
        db_path = home / "broken.db"
        db_path.write_bytes(b"")
        save_config({"database": str(db_path)}, get_config_path())
        return db_path

    def test_list_reports_failure(self, broken: Path) -> None:
        """Should report the error instead of an empty listing."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "Database error" in result.output
        assert "No expenses" not in result.output

    def test_summary_reports_failure(self, broken: Path) -> None:
        """Should report the error instead of empty statistics."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 1
        assert "Database error" in result.output
        assert "No expenses" not in result.output
        assert "N/A" not in result.output
