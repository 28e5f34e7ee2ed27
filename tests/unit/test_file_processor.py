"""
Unit tests for call_tree_analyzer.processors.file_processor module.
"""
import pytest
from call_tree_analyzer.core.exceptions import TraceFormatError
from call_tree_analyzer.processors.file_processor import TraceFileProcessor


class TestIsValidNode:
    """Tests for TraceFileProcessor.is_valid_node()."""

    def test_valid(self):
        assert TraceFileProcessor.is_valid_node({'id': 'a', 'name': 'a', 'duration': 1.5})

    @pytest.mark.parametrize('node', [
        {'name': 'a', 'duration': 1},
        {'id': 1, 'name': 'a', 'duration': 1},
        {'id': 'a', 'duration': 1},
        {'id': 'a', 'name': 'a', 'duration': '1'},
        {'id': 'a', 'name': 'a', 'duration': True},
        'not a node',
    ])
    def test_invalid(self, node):
        assert not TraceFileProcessor.is_valid_node(node)


class TestProcessFile:
    """Tests for TraceFileProcessor.process_file()."""

    def test_flat_list(self, temp_json_file, multi_root_nodes):
        path = temp_json_file(multi_root_nodes)
        nodes = TraceFileProcessor.process_file(path)

        assert [n['id'] for n in nodes] == ['a', 'b', 'a1']
        assert nodes[2]['parentCallId'] == 'a'

    def test_floats_are_not_decimals(self, temp_json_file):
        path = temp_json_file([{'id': 'a', 'name': 'a', 'duration': 1.25}])
        nodes = TraceFileProcessor.process_file(path)
        assert isinstance(nodes[0]['duration'], float)

    def test_tree_document_is_flattened(self, temp_json_file, critical_path_tree):
        path = temp_json_file(critical_path_tree)
        nodes = TraceFileProcessor.process_file(path)

        assert [n['id'] for n in nodes] == ['root', 'child1', 'child2', 'grandchild']
        assert nodes[3]['parentCallId'] == 'child2'
        assert all('children' not in n for n in nodes)

    def test_malformed_entries_skipped(self, temp_json_file):
        path = temp_json_file([
            {'id': 'ok', 'name': 'ok', 'duration': 3},
            {'id': 'bad', 'name': 'bad'},
            42,
        ])
        nodes = TraceFileProcessor.process_file(path)
        assert [n['id'] for n in nodes] == ['ok']

    def test_leading_whitespace(self, tmp_path):
        path = tmp_path / 'padded.json'
        path.write_text('\n   [{"id": "a", "name": "a", "duration": 1}]')
        assert len(TraceFileProcessor.process_file(str(path))) == 1

    def test_scalar_document_rejected(self, tmp_path):
        path = tmp_path / 'scalar.json'
        path.write_text('"just a string"')
        with pytest.raises(TraceFormatError):
            TraceFileProcessor.process_file(str(path))

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / 'empty.json'
        path.write_text('')
        with pytest.raises(TraceFormatError):
            TraceFileProcessor.process_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TraceFileProcessor.process_file(str(tmp_path / 'missing.json'))


class TestProcessDocument:
    """Tests for TraceFileProcessor.process_document()."""

    def test_list(self, multi_root_nodes):
        assert len(TraceFileProcessor.process_document(multi_root_nodes)) == 3

    def test_rejects_scalars(self):
        with pytest.raises(TraceFormatError):
            TraceFileProcessor.process_document(7)
