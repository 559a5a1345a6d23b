"""
Tests for the gostruct-gen command line entry point.
"""

import logging
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import pytest
import yaml

from gostruct_generator import cli
from gostruct_generator.config_validation import ToolConfigSchema
from gostruct_generator.domain.models import ColumnFact, TableSchema
from gostruct_generator.exceptions import ConfigurationError, SchemaIntrospectionError


MODULE = "gostruct_generator.cli"


@pytest.fixture(autouse=True)
def keep_root_handlers():
    with patch(f"{MODULE}.setup_colored_logging"):
        yield


USERS = TableSchema(
    name="users",
    columns=[
        ColumnFact("id", "int", nullable=False),
        ColumnFact("email", "varchar", nullable=False),
    ],
    primary_keys=["id"],
    column_lengths={"email": 100},
)


def _write_config(tmp_path: Path, **extra) -> Path:
    config = {
        "databases": {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": "app.sqlite3"}},
        "output_dir": str(tmp_path / "out"),
    }
    config.update(extra)
    path = tmp_path / "gostruct.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


class TestBuildParser(TestCase):
    """Test cases for the argument parser"""

    def test_toggles_default_to_none(self):
        """Test tag toggles stay unset unless given"""
        args = cli.build_parser().parse_args([])
        assert args.json_annotation is None
        assert args.gorm_annotation is None
        assert args.validate_annotation is None
        assert args.guregu_types is None

    def test_toggles_and_repeated_tables(self):
        """Test toggles, repeated tables and name overrides are parsed"""
        args = cli.build_parser().parse_args(
            ["-t", "users", "-t", "orders", "--no-json", "--gorm", "--validate", "--guregu",
             "--struct", "User", "-p", "entities"]
        )
        assert args.table == ["users", "orders"]
        assert args.json_annotation is False
        assert args.gorm_annotation is True
        assert args.validate_annotation is True
        assert args.guregu_types is True
        assert args.struct_name == "User"
        assert args.package_name == "entities"


class TestSelectTables(TestCase):
    """Test cases for select_tables"""

    def _config(self, **extra):
        return ToolConfigSchema.model_validate({
            "databases": {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": "x"}},
            **extra,
        })

    def test_all_tables_minus_excluded(self):
        """Test all tables are selected except the excluded ones"""
        config = self._config(exclude_tables=["audit_log"])
        with self.assertLogs(MODULE, level=logging.INFO) as captured:
            assert cli.select_tables(config, ["audit_log", "users"]) == ["users"]
        assert "Excluding table: audit_log" in captured.output[0]

    def test_explicit_tables_keep_given_order(self):
        """Test explicitly named tables keep the given order"""
        config = self._config(tables=["users", "orders"])
        assert cli.select_tables(config, ["orders", "users"]) == ["users", "orders"]

    def test_unknown_table_is_a_configuration_error(self):
        """Test naming a missing table raises ConfigurationError"""
        config = self._config(tables=["ghost"])
        with self.assertRaises(ConfigurationError) as ctx:
            cli.select_tables(config, ["users"])
        assert "ghost" in str(ctx.exception)


@patch(f"{MODULE}.setup_django")
@patch(f"{MODULE}.list_tables", return_value=["users"])
@patch(f"{MODULE}.introspect_table", return_value=USERS)
@patch("gostruct_generator.codegen_utils.find_gofmt", return_value="")
def test_main_writes_one_file_per_table(_gofmt, _introspect, _list, mock_setup, tmp_path):
    """Test a full run writes one Go file per table"""
    config_path = _write_config(tmp_path)

    cli.main(["-c", str(config_path), "--validate", "--no-color"])

    mock_setup.assert_called_once()
    source = (tmp_path / "out" / "users.go").read_text(encoding="utf-8")
    assert "type Users struct {" in source
    assert '\tEmail string `validate:"required,max=100" json:"email"`' in source


@patch(f"{MODULE}.setup_django")
@patch(f"{MODULE}.list_tables", return_value=["users"])
@patch(f"{MODULE}.introspect_table", return_value=USERS)
@patch("gostruct_generator.codegen_utils.find_gofmt", return_value="")
def test_main_struct_name_override(_gofmt, _introspect, _list, _setup, tmp_path):
    """Test --struct renames the generated struct"""
    config_path = _write_config(tmp_path)

    cli.main(["-c", str(config_path), "-t", "users", "--struct", "Account", "--no-color"])

    source = (tmp_path / "out" / "users.go").read_text(encoding="utf-8")
    assert "type Account struct {" in source
    assert "func (a *Account) TableName() string {" in source


@patch(f"{MODULE}.setup_django")
@patch(f"{MODULE}.list_tables", return_value=["users"])
def test_main_exits_cleanly_when_nothing_selected(_list, _setup, tmp_path):
    """Test an empty selection exits with status 0"""
    config_path = _write_config(tmp_path, exclude_tables=["users"])

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["-c", str(config_path), "--no-color"])
    assert exc_info.value.code == 0
    assert not (tmp_path / "out").exists()


@patch(f"{MODULE}.setup_django")
@patch(f"{MODULE}.list_tables", return_value=["users"])
@patch(f"{MODULE}.introspect_table", side_effect=SchemaIntrospectionError("boom", table="users"))
def test_main_exits_with_error_on_generator_errors(_introspect, _list, _setup, tmp_path):
    """Test generator errors exit with status 1"""
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["-c", str(config_path), "--no-color"])
    assert exc_info.value.code == 1


@patch(f"{MODULE}.setup_django", side_effect=RuntimeError("settings already configured"))
def test_main_exits_with_error_on_runtime_errors(_setup, tmp_path):
    """Test runtime errors exit with status 1"""
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["-c", str(config_path), "--no-color"])
    assert exc_info.value.code == 1
