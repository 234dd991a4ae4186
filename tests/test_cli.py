"""Tests for the meilies CLI."""

import json

from meilies.cli import main


class TestParseCommand:
    """Test `meilies parse`."""

    def test_publish_table(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "PUBLISH", "orders", "hello"])

        assert result.exit_code == 0
        assert "publish" in result.output
        assert "orders" in result.output
        assert "'hello'" in result.output
        assert "5 bytes" in result.output

    def test_subscribe_tail(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "subscribe", "orders"])

        assert result.exit_code == 0
        assert "tail" in result.output

    def test_subscribe_json(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "subscribe", "orders:42", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"cmd": "subscribe", "stream": "orders", "from": 42}

    def test_output_format_from_env(self, runner, clean_env):
        clean_env.setenv("MEILIES_OUTPUT_FORMAT", "json")

        result = runner.invoke(main, ["parse", "subscribe", "orders"])

        assert result.exit_code == 0
        assert json.loads(result.output)["from"] == -1

    def test_hex_arguments(self, runner, clean_env):
        """Binary events can be given as hex."""
        result = runner.invoke(main, ["parse", "--hex", "7075626c697368", "6f", "ff00"])

        assert result.exit_code == 0
        assert "[255, 0]" in result.output

    def test_bad_hex(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "--hex", "zz"])

        assert result.exit_code == 2

    def test_invalid_offset(self, runner, clean_env):
        """Invalid requests print the error reply and exit 1."""
        result = runner.invoke(main, ["parse", "subscribe", "orders:"])

        assert result.exit_code == 1
        assert "ERR invalid offset" in result.output

    def test_missing_command_name(self, runner, clean_env):
        result = runner.invoke(main, ["parse"])

        assert result.exit_code == 1
        assert "ERR missing command name" in result.output

    def test_unknown_command(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "frobnicate"])

        assert result.exit_code == 1
        assert "ERR command not found" in result.output

    def test_invalid_env(self, runner, clean_env):
        clean_env.setenv("MEILIES_OUTPUT_FORMAT", "xml")

        result = runner.invoke(main, ["parse", "subscribe", "orders"])

        assert result.exit_code == 2


class TestEncodeCommand:
    """Test `meilies encode`."""

    def test_escaped_output(self, runner, clean_env):
        result = runner.invoke(main, ["encode", "SUBSCRIBE", "orders"])

        assert result.exit_code == 0
        assert result.output.strip() == r"*2\r\n$9\r\nSUBSCRIBE\r\n$6\r\norders\r\n"

    def test_raw_output(self, runner, clean_env):
        result = runner.invoke(main, ["encode", "--raw", "PUBLISH", "s", "e"])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"*3\r\n$7\r\nPUBLISH\r\n$1\r\ns\r\n$1\r\ne\r\n"


class TestConfigCommand:
    def test_show_config_json(self, runner, clean_env):
        result = runner.invoke(main, ["--log-level", "info", "config", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"log_level": "INFO", "output_format": "table"}

    def test_show_config_table(self, runner, clean_env):
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Log level:" in result.output


class TestRawArguments:
    """Arguments that are not UTF-8 on the command line reach the parser as bytes."""

    def test_binary_event(self, runner, clean_env):
        result = runner.invoke(main, ["parse", "publish", "s", "\udcff"])

        assert result.exit_code == 0
        assert "[255]" in result.output

    def test_binary_stream_name(self, runner, clean_env):
        """A stream name that is not UTF-8 is rejected by the parser, not the CLI."""
        result = runner.invoke(main, ["parse", "publish", "\udcff", "x"])

        assert result.exit_code == 1
        assert "ERR invalid utf8 string" in result.output

    def test_encode_binary_argument(self, runner, clean_env):
        result = runner.invoke(main, ["encode", "--raw", "publish", "s", "\udcff"])

        assert result.exit_code == 0
        assert result.stdout_bytes.endswith(b"$1\r\n\xff\r\n")
