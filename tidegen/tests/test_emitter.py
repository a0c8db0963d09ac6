"""Tests for code emitters."""

import pytest

from tidegen.codegen.emitter import FileEmitter, StringEmitter, relative_path
from tidegen.exceptions import OutputError


class TestRelativePath:
    def test_module_file(self):
        assert relative_path('team', 'index') == 'team/index.ts'

    def test_root_file(self):
        assert relative_path(None, 'index') == 'index.ts'


class TestFileEmitter:
    """Tests for FileEmitter."""

    def test_write_creates_directories(self, tmp_path):
        emitter = FileEmitter(tmp_path / 'out')
        emitter.prepare()
        emitter.write('types', 'enum', 'export type A = string;\n')

        path = tmp_path / 'out' / 'types' / 'enum.ts'
        assert path.read_text() == 'export type A = string;\n'
        assert emitter.written_files == [str(path)]

    def test_prepare_without_force_keeps_files(self, tmp_path):
        (tmp_path / 'keep.ts').write_text('x')

        FileEmitter(tmp_path).prepare()
        assert (tmp_path / 'keep.ts').exists()

    def test_prepare_with_force_clears_directory(self, tmp_path):
        output = tmp_path / 'out'
        (output / 'team').mkdir(parents=True)
        (output / 'team' / 'index.ts').write_text('x')

        FileEmitter(output, force=True).prepare()

        assert output.exists()
        assert list(output.iterdir()) == []

    def test_write_failure(self, tmp_path):
        """Test that a file blocking a module directory raises OutputError."""
        (tmp_path / 'team').write_text('not a directory')
        emitter = FileEmitter(tmp_path)

        with pytest.raises(OutputError):
            emitter.write('team', 'index', 'x')

    def test_write_outside_output_directory(self, tmp_path):
        """Test that a module name cannot lead out of the output directory."""
        emitter = FileEmitter(tmp_path / 'out')

        with pytest.raises(OutputError):
            emitter.write('../escaped', 'index', 'x')

        assert not (tmp_path / 'escaped').exists()


class TestStringEmitter:
    def test_files_keyed_by_path(self):
        emitter = StringEmitter()
        assert emitter.write('team', 'index', 'a') == 'team/index.ts'
        assert emitter.write(None, 'index', 'b') == 'index.ts'
        assert emitter.files == {'team/index.ts': 'a', 'index.ts': 'b'}
