"""Tests for main entry point"""

from unittest.mock import Mock, patch

import pytest

from smoggytexas.main import main


class TestMainEntryPoint:
    """Tests for main() entry point function"""

    @patch('smoggytexas.main.run_cli')
    @patch('smoggytexas.main.setup_logging')
    @patch('smoggytexas.main.parse_args')
    def test_exit_code_from_command(self, mock_parse_args, mock_setup_logging, mock_run_cli):
        """Test that the command's return value becomes the exit code"""
        mock_args = Mock()
        mock_args.verbose = False
        mock_args.log_file = None
        mock_parse_args.return_value = mock_args
        mock_run_cli.return_value = 0

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        mock_setup_logging.assert_called_once_with(level="INFO", log_file=None)
        mock_run_cli.assert_called_once_with(mock_args)

    @patch('smoggytexas.main.run_cli')
    @patch('smoggytexas.main.setup_logging')
    @patch('smoggytexas.main.parse_args')
    def test_verbose_enables_debug(self, mock_parse_args, mock_setup_logging, mock_run_cli):
        """Test that -v sets up debug logging"""
        mock_args = Mock()
        mock_args.verbose = True
        mock_args.log_file = "/tmp/run.log"
        mock_parse_args.return_value = mock_args
        mock_run_cli.return_value = 1

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        mock_setup_logging.assert_called_once_with(level="DEBUG", log_file="/tmp/run.log")

    @patch('smoggytexas.main.run_cli')
    @patch('smoggytexas.main.setup_logging')
    @patch('smoggytexas.main.parse_args')
    def test_keyboard_interrupt(self, mock_parse_args, mock_setup_logging, mock_run_cli):
        """Test that Ctrl-C exits with 130"""
        mock_args = Mock()
        mock_args.verbose = False
        mock_args.log_file = None
        mock_parse_args.return_value = mock_args
        mock_run_cli.side_effect = KeyboardInterrupt()

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 130

    @patch('smoggytexas.cli.commands.spot_price_commands.build_report')
    @patch('sys.argv', ['smoggytexas'])
    def test_missing_instance_types_end_to_end(self, mock_build_report, capsys):
        """Test that running with no flags prints usage and exits 1"""
        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        mock_build_report.assert_not_called()
        assert "usage:" in capsys.readouterr().err
