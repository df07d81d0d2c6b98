"""Tests for configuration system."""

from pathlib import Path

from goxsd.config import Config, LoggingConfig, OutputFormat, SerializerConfig
from goxsd.logger import LogLevel


class TestConfig:
    """Tests for Config class."""

    def test_default_config(self):
        config = Config()

        assert config.input_file is None
        assert config.output_file is None
        assert config.output_format == OutputFormat.GO
        assert config.package_name == "main"
        assert not config.export
        assert config.prefix == ""
        assert config.logging.level == LogLevel.INFO
        assert config.serializer.pretty

    def test_config_validation_missing_input(self):
        assert Config().validate() == []

    def test_config_validation_nonexistent_input(self, temp_dir):
        config = Config(input_file=temp_dir / "nonexistent.xsd")

        errors = config.validate()

        assert len(errors) == 1
        assert "does not exist" in errors[0]

    def test_config_validation_wrong_extension(self, temp_dir):
        wrong_file = temp_dir / "test.txt"
        wrong_file.touch()

        errors = Config(input_file=wrong_file).validate()

        assert len(errors) == 1
        assert "extension" in errors[0].lower()

    def test_config_validation_nonexistent_output_directory(self, temp_dir):
        config = Config(output_file=temp_dir / "nonexistent" / "out.go")

        errors = config.validate()

        assert len(errors) == 1
        assert "Output directory does not exist" in errors[0]

    def test_config_validation_package_name(self):
        errors = Config(package_name="9lives").validate()

        assert len(errors) == 1
        assert "Package name" in errors[0]

    def test_config_validation_prefix(self):
        errors = Config(prefix="bad prefix").validate()

        assert len(errors) == 1
        assert "Prefix" in errors[0]

    def test_config_validation_valid(self, address_xsd_file, temp_dir):
        config = Config(input_file=address_xsd_file, output_file=temp_dir / "out.go", prefix="Xsd_")

        assert config.validate() == []

    def test_from_cli_args_basic(self):
        config = Config.from_cli_args(
            input_file=Path("test.xsd"),
            output_format="json",
            log_level="debug",
            pretty=False,
        )

        assert config.input_file == Path("test.xsd")
        assert config.output_format == OutputFormat.JSON
        assert config.logging.level == LogLevel.DEBUG
        assert not config.serializer.pretty

    def test_from_cli_args_go_options(self):
        config = Config.from_cli_args(package_name="feed", export=True, prefix="Gen")

        assert config.package_name == "feed"
        assert config.export
        assert config.prefix == "Gen"

    def test_from_cli_args_ignores_none(self):
        config = Config.from_cli_args(output_file=None, package_name=None)

        assert config.output_file is None
        assert config.package_name == "main"


class TestNestedConfig:
    """Tests for nested configuration dataclasses."""

    def test_default_logging_config(self):
        assert LoggingConfig().level == LogLevel.INFO

    def test_default_serializer_config(self):
        assert SerializerConfig().pretty


class TestEnums:
    """Tests for enum classes."""

    def test_output_format_enum(self):
        assert OutputFormat.GO == "go"
        assert OutputFormat.JSON == "json"
