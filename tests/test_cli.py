"""End-to-end tests for the subtrackr CLI using temporary XDG directories."""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest
from typer.testing import CliRunner

from subtrackr.cli import app
from subtrackr.config import get_config_path, save_config
from subtrackr.store.queries import SUBSCRIPTIONS_KEY, load_subscriptions, set_value
from subtrackr.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point data and config directories at a temporary location."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("COLUMNS", "200")
    return tmp_path


@pytest.fixture
def initialized() -> None:
    """Run 'subtrackr init'."""
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, isolated_dirs: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_dirs / "data" / "subtrackr" / "subtrackr.db").exists()
        assert (isolated_dirs / "config" / "subtrackr" / "config.toml").exists()
        assert load_subscriptions(get_db_path()) == []

    def test_refuses_to_overwrite(self, initialized: None) -> None:
        """Should fail without --force when files exist."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "--force" in result.output

    def test_force_with_sample(self, initialized: None) -> None:
        """Should recreate the database with sample data."""
        result = runner.invoke(app, ["init", "--force", "--sample"])

        assert result.exit_code == 0
        assert [s.name for s in load_subscriptions(get_db_path())] == ["Netflix", "Spotify", "Notion"]


class TestWithoutInit:
    """Commands should explain how to get started."""

    @pytest.mark.parametrize("command", [["list"], ["summary"], ["analytics"], ["schedule"], ["renew"]])
    def test_requires_database(self, command: list[str]) -> None:
        """Should exit with an error before init."""
        result = runner.invoke(app, command)

        assert result.exit_code == 1
        assert "subtrackr init" in result.output


class TestAddEditRemove:
    """Tests for add, edit and remove."""

    def test_add(self, initialized: None) -> None:
        """Should store a new subscription."""
        result = runner.invoke(app, ["add", "Netflix", "17000", "--category", "entertainment"])

        assert result.exit_code == 0, result.output
        subs = load_subscriptions(get_db_path())
        assert len(subs) == 1
        assert subs[0].name == "Netflix"
        assert subs[0].currency == "KRW"
        assert subs[0].next_payment > datetime.now()

    def test_add_with_date_and_currency(self, initialized: None) -> None:
        """Should accept an explicit next payment date and currency."""
        result = runner.invoke(
            app,
            ["add", "GitHub", "4", "--currency", "usd", "--interval", "monthly", "--next-payment", "2030-03-15"],
        )

        assert result.exit_code == 0, result.output
        sub = load_subscriptions(get_db_path())[0]
        assert sub.currency == "USD"
        assert sub.next_payment == datetime(2030, 3, 15)

    def test_add_rejects_bad_cost(self, initialized: None) -> None:
        """Should reject non-positive costs."""
        result = runner.invoke(app, ["add", "Netflix", "0"])

        assert result.exit_code == 1
        assert "Cost must be positive" in result.output
        assert load_subscriptions(get_db_path()) == []

    def test_add_rejects_bad_interval(self, initialized: None) -> None:
        """Should reject unknown intervals."""
        result = runner.invoke(app, ["add", "Netflix", "17000", "--interval", "daily"])

        assert result.exit_code == 1
        assert "daily" in result.output

    def test_edit_status(self, initialized: None) -> None:
        """Should update fields by id prefix."""
        runner.invoke(app, ["add", "Netflix", "17000"])
        sub_id = load_subscriptions(get_db_path())[0].id

        result = runner.invoke(app, ["edit", sub_id[:8], "--status", "cancelled", "--cost", "18500"])

        assert result.exit_code == 0, result.output
        sub = load_subscriptions(get_db_path())[0]
        assert sub.status == "cancelled"
        assert str(sub.cost) == "18500"
        assert sub.id == sub_id

    def test_edit_unknown_id(self, initialized: None) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["edit", "nope", "--name", "X"])

        assert result.exit_code == 1
        assert "No unique subscription" in result.output

    def test_remove(self, initialized: None) -> None:
        """Should delete the subscription."""
        runner.invoke(app, ["add", "Netflix", "17000"])
        runner.invoke(app, ["add", "Spotify", "13900"])
        netflix = load_subscriptions(get_db_path())[0]

        result = runner.invoke(app, ["remove", netflix.id])

        assert result.exit_code == 0, result.output
        assert [s.name for s in load_subscriptions(get_db_path())] == ["Spotify"]


class TestViews:
    """Tests for list, summary, analytics and schedule."""

    @pytest.fixture
    def sample(self) -> None:
        """Initialize with sample data."""
        result = runner.invoke(app, ["init", "--sample"])
        assert result.exit_code == 0, result.output

    def test_list(self, sample: None) -> None:
        """Should show subscriptions in a table."""
        result = runner.invoke(app, ["list", "--sort", "cost"])

        assert result.exit_code == 0, result.output
        assert "Netflix" in result.output
        assert "₩17,000/mo" in result.output

    def test_list_filter(self, sample: None) -> None:
        """Should apply the category filter."""
        result = runner.invoke(app, ["list", "--category", "productivity"])

        assert result.exit_code == 0, result.output
        assert "Notion" in result.output
        assert "Netflix" not in result.output

    def test_list_bad_sort(self, sample: None) -> None:
        """Should reject unknown sort keys."""
        result = runner.invoke(app, ["list", "--sort", "price"])

        assert result.exit_code == 1

    def test_summary(self, sample: None) -> None:
        """Should show monthly and yearly totals."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "₩38,900" in result.output
        assert "₩466,800" in result.output

    def test_analytics(self, sample: None) -> None:
        """Should show the category breakdown, top spender first."""
        result = runner.invoke(app, ["analytics"])

        assert result.exit_code == 0, result.output
        assert "79.4%" in result.output
        assert "20.6%" in result.output
        assert result.output.index("Entertainment") < result.output.index("Productivity")

    def test_schedule(self, sample: None) -> None:
        """Should list payments due within the horizon."""
        result = runner.invoke(app, ["schedule"])

        assert result.exit_code == 0, result.output
        assert "Netflix" in result.output
        assert "Spotify" not in result.output

    def test_export(self, sample: None, isolated_dirs: Path) -> None:
        """Should write every subscription to CSV."""
        output = isolated_dirs / "export.csv"

        result = runner.invoke(app, ["export", "--output", str(output)])

        assert result.exit_code == 0, result.output
        frame = pd.read_csv(output)
        assert list(frame["name"]) == ["Netflix", "Spotify", "Notion"]
        assert list(frame["monthly_cost"]) == [17000, 13900, 8000]


class TestRenewAndClear:
    """Tests for renew and clear."""

    def test_renew_rolls_forward(self, initialized: None) -> None:
        """Should move stale payment dates after now, keeping the day."""
        runner.invoke(app, ["add", "Gym", "50000", "--next-payment", "2020-01-15"])

        result = runner.invoke(app, ["renew"])

        assert result.exit_code == 0, result.output
        sub = load_subscriptions(get_db_path())[0]
        assert sub.next_payment > datetime.now()
        assert sub.next_payment.day == 15

    def test_renew_nothing_to_do(self, initialized: None) -> None:
        """Should report when dates are current."""
        runner.invoke(app, ["add", "Netflix", "17000"])

        result = runner.invoke(app, ["renew"])

        assert result.exit_code == 0
        assert "up to date" in result.output

    def test_clear(self, initialized: None) -> None:
        """Should delete everything after confirmation."""
        runner.invoke(app, ["add", "Netflix", "17000"])

        result = runner.invoke(app, ["clear"], input="y\n")

        assert result.exit_code == 0, result.output
        assert load_subscriptions(get_db_path()) == []

    def test_clear_declined(self, initialized: None) -> None:
        """Should keep data when the prompt is declined."""
        runner.invoke(app, ["add", "Netflix", "17000"])

        result = runner.invoke(app, ["clear"], input="n\n")

        assert result.exit_code == 0
        assert len(load_subscriptions(get_db_path())) == 1


class TestBackup:
    """Tests for the backup command."""

    def test_copies_database_and_config(self, initialized: None, isolated_dirs: Path) -> None:
        """Should write timestamped copies into the output directory."""
        backup_dir = isolated_dirs / "backups"

        result = runner.invoke(app, ["backup", "--output", str(backup_dir)])

        assert result.exit_code == 0, result.output
        assert len(list(backup_dir.glob("subtrackr_*.db"))) == 1
        assert len(list(backup_dir.glob("config_*.toml"))) == 1

    def test_requires_database(self, isolated_dirs: Path) -> None:
        """Should fail before init."""
        result = runner.invoke(app, ["backup", "--output", str(isolated_dirs / "backups")])

        assert result.exit_code == 1


class TestBadData:
    """Commands should report unusable stored data and config instead of crashing."""

    def test_add_with_corrupt_store(self, initialized: None) -> None:
        """Should report a corrupt document when adding."""
        set_value(SUBSCRIPTIONS_KEY, "not json", get_db_path())

        result = runner.invoke(app, ["add", "Netflix", "17000"])

        assert result.exit_code == 1
        assert "Stored data is corrupt" in result.output

    def test_bracketed_name_is_shown_literally(self, initialized: None) -> None:
        """Names that look like console markup should display as typed."""
        result = runner.invoke(app, ["add", "Promo [/x]", "1000", "--interval", "weekly"])
        assert result.exit_code == 0, result.output

        for command in (["list"], ["summary"], ["schedule"]):
            result = runner.invoke(app, command)

            assert result.exit_code == 0, result.output
            assert "Promo [/x]" in result.output

    def test_wrong_setting_type(self, initialized: None) -> None:
        """Should report a non-numeric upcoming_days setting."""
        save_config({"currency": "KRW", "upcoming_days": "7"}, get_config_path())

        result = runner.invoke(app, ["schedule"])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_invalid_toml(self, initialized: None) -> None:
        """Should report a config file that is not valid TOML."""
        get_config_path().write_text("currency = \n")

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 1
        assert "Config error" in result.output
