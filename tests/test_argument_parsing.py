"""
Tests for CLI argument parsing and validation.
"""
import sys
from unittest import mock

import pytest

from bayan.cli import CLIApplication
from bayan.core.models import ChecksumKind


class TestArgumentParsing:
    """Test CLI argument parsing with argparse."""

    def test_defaults(self):
        with mock.patch.object(sys, 'argv', ['bayan']):
            args = CLIApplication.parse_args()

        assert args.directories == ["."]
        assert args.excludes == []
        assert args.level == 0
        assert args.min_size == "1"
        assert args.masks == []
        assert args.block_size == "1024"
        assert args.checksum == "crc32"
        assert args.workers == 1
        assert not args.keep_one and not args.force

    def test_short_and_long_forms(self):
        long_form = CLIApplication.parse_args([
            '--directories', '/a', '/b', '--excludes', '/a/x', '--level', '1',
            '--min-size', '10K', '--masks', '*.jpg', '*.png', '--block-size', '64K',
            '--checksum', 'xxhash', '--workers', '4'
        ])
        short_form = CLIApplication.parse_args([
            '-d', '/a', '/b', '-e', '/a/x', '-l', '1',
            '-s', '10K', '-m', '*.jpg', '*.png', '-b', '64K',
            '-c', 'xxhash', '-w', '4'
        ])

        assert vars(long_form) == vars(short_form)
        assert long_form.directories == ['/a', '/b']
        assert long_form.masks == ['*.jpg', '*.png']

    @pytest.mark.parametrize("argv", [
        ['-l', '2'],
        ['-c', 'md5'],
        ['-w', 'many'],
    ])
    def test_invalid_choices_rejected(self, argv):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(argv)


class TestCreateParams:
    """Conversion of parsed arguments into SearchParams."""

    def test_sizes_and_level(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args(['-d', str(temp_dir), '-l', '1', '-s', '1K', '-b', '64K', '-c', 'xxh32'])
        params = app.create_params(args)

        assert params.root_dirs == [str(temp_dir)]
        assert params.recursive is True
        assert params.min_size_bytes == 1024
        assert params.block_size == 65536
        assert params.checksum is ChecksumKind.XXHASH

    def test_relative_directories_are_resolved(self, temp_dir, monkeypatch):
        (temp_dir / "photos").mkdir()
        monkeypatch.chdir(temp_dir)
        app = CLIApplication()
        params = app.create_params(app.parse_args(['-d', 'photos', '-e', 'photos/cache']))

        assert params.root_dirs == [str(temp_dir / "photos")]
        assert params.excluded_dirs == [str(temp_dir / "photos" / "cache")]

    @pytest.mark.parametrize("option, value", [('-b', '0'), ('-b', 'huge'), ('-s', '-5'), ('-w', '0')])
    def test_invalid_values_exit_with_error(self, temp_dir, capsys, option, value):
        app = CLIApplication()
        args = app.parse_args(['-d', str(temp_dir), option, value])

        with pytest.raises(SystemExit) as exc_info:
            app.create_params(args)

        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err


class TestValidateArgs:

    def test_force_requires_keep_one(self, temp_dir, capsys):
        app = CLIApplication()
        with pytest.raises(SystemExit):
            app.validate_args(app.parse_args(['-d', str(temp_dir), '--force']))
        assert "--force can only be used with --keep-one" in capsys.readouterr().err

    def test_missing_directory(self, temp_dir, capsys):
        app = CLIApplication()
        with pytest.raises(SystemExit):
            app.validate_args(app.parse_args(['-d', str(temp_dir / "missing")]))
        assert "Directory not found" in capsys.readouterr().err

    def test_file_instead_of_directory(self, temp_dir, capsys):
        path = temp_dir / "file.txt"
        path.write_text("x")
        app = CLIApplication()
        with pytest.raises(SystemExit):
            app.validate_args(app.parse_args(['-d', str(path)]))
        assert "Path is not a directory" in capsys.readouterr().err

    def test_missing_exclude_only_warns(self, temp_dir, capsys):
        app = CLIApplication()
        app.validate_args(app.parse_args(['-d', str(temp_dir), '-e', str(temp_dir / "ghost")]))
        assert "Warning: Excluded directory not found" in capsys.readouterr().err

    def test_keep_one_without_terminal_requires_force(self, temp_dir, capsys):
        app = CLIApplication()
        with mock.patch.object(sys.stdin, 'isatty', return_value=False):
            with pytest.raises(SystemExit):
                app.validate_args(app.parse_args(['-d', str(temp_dir), '--keep-one']))
        assert "non-interactive" in capsys.readouterr().err
