"""
Tests for the manifest-driven pipeline and CLI.
"""

import sys

import polars as pl
import pytest
import yaml

from bitscope.run import execute_steps, main, run


def write_case(tmp_path, bits, manifest):
    inp = tmp_path / 'input.bits'
    inp.write_text(bits)
    man = tmp_path / 'manifest.yaml'
    man.write_text(yaml.safe_dump(manifest))
    return str(inp), str(man), str(tmp_path / 'out')


def step(operation, params=None, rng=None):
    return {'operation': operation, 'params': params or {}, 'range': rng}


class TestExecuteSteps:
    """Step execution, budget and failures."""

    def test_sequence(self):
        bits, records = execute_steps('11110000', [step('NOT'), step('ROL', {'count': 2})])
        assert bits == '00111100'
        assert [r.operation for r in records] == ['NOT', 'ROL']
        assert records[0].bits_before == '11110000'
        assert records[0].bits_after == '00001111'
        assert records[1].size_after == 8
        assert all(r.success for r in records)
        assert records[0].budget_remaining is None

    def test_budget_stops_execution(self):
        bits, records = execute_steps('1010', [step('NOT'), step('NAND'), step('NOT')], budget=2)
        assert len(records) == 1, "NAND costs 2 with only 1 left"
        assert records[0].budget_remaining == 1
        assert bits == '0101'

    def test_failed_step_continues(self):
        bits, records = execute_steps(
            '1100', [step('DIV', {'value': '0'}), step('FROBNICATE'), step('NOT')], budget=10,
        )
        assert [r.success for r in records] == [False, False, True]
        assert records[0].cost == 0
        assert records[0].bits_after == '1100'
        assert 'divide' in records[0].error
        assert records[2].budget_remaining == 9
        assert bits == '0011'

    def test_malformed_params_do_not_abort(self):
        bits, records = execute_steps('1111', [step('MOVE', {'source': '1'}), step('NOT')])
        assert [r.success for r in records] == [False, True]
        assert 'source' in records[0].error
        assert bits == '0000'

    def test_range_step(self):
        bits, _ = execute_steps('11110000', [step('NOT', rng=(2, 6))])
        assert bits == '11001100'


class TestRun:
    """End-to-end pipeline runs."""

    def test_outputs_csv(self, tmp_path):
        inp, man, out = write_case(tmp_path, '11110000' * 4, {
            'format': 'csv',
            'steps': [{'operation': 'XOR', 'params': {'mask': '1' * 32}}],
        })
        result = run(inp, man, out, verbose=False)

        assert result['bits'] == '00001111' * 4
        metrics = pl.read_csv(f'{out}/metrics.csv')
        assert metrics['label'].to_list() == ['initial', 'final']
        assert 'shannon_entropy' in metrics.columns

        log = pl.read_csv(f'{out}/transformations.csv', infer_schema_length=0)
        assert log.height == 1
        assert log['operation'][0] == 'XOR'
        assert (tmp_path / 'out' / 'final.bits').read_text() == '00001111' * 4

    def test_default_parquet(self, tmp_path):
        inp, man, out = write_case(tmp_path, '1010', {'steps': ['NOT', 'REVERSE']})
        run(inp, man, out, verbose=False)
        log = pl.read_parquet(f'{out}/transformations.parquet')
        assert log['step'].to_list() == [1, 2]
        assert log['success'].to_list() == [True, True]

    def test_format_argument_wins(self, tmp_path):
        inp, man, out = write_case(tmp_path, '1010', {'format': 'csv', 'steps': []})
        run(inp, man, out, fmt='json', verbose=False)
        assert (tmp_path / 'out' / 'metrics.json').exists()
        assert (tmp_path / 'out' / 'transformations.json').exists()

    def test_partitions_reach_metrics(self, tmp_path):
        inp, man, out = write_case(tmp_path, '1010', {
            'steps': [],
            'partitions': [{'start': 0, 'end': 4, 'entropy': 1.0}],
        })
        result = run(inp, man, out, verbose=False)
        assert result['metrics']['final']['partition_count'] == 1

    def test_anomalies_written_on_request(self, tmp_path):
        inp, man, out = write_case(tmp_path, '0' * 12 + '1' * 2, {
            'format': 'csv',
            'steps': [],
            'anomalies': ['long_run', 'byte_misalignment'],
        })
        result = run(inp, man, out, verbose=False)
        assert result['anomalies']['long_run'] == [{'position': 0, 'length': 12, 'bit': '0'}]

        table = pl.read_csv(f'{out}/anomalies.csv')
        assert table['detector'].to_list() == ['long_run', 'byte_misalignment']
        assert table['position'].to_list() == [0, 8]

    def test_no_anomalies_by_default(self, tmp_path):
        inp, man, out = write_case(tmp_path, '1010', {'steps': []})
        result = run(inp, man, out, verbose=False)
        assert result['anomalies'] == {}
        assert not (tmp_path / 'out' / 'anomalies.parquet').exists()

    def test_missing_input(self, tmp_path):
        _, man, out = write_case(tmp_path, '1', {'steps': []})
        with pytest.raises(FileNotFoundError):
            run(str(tmp_path / 'absent.bin'), man, out, verbose=False)

    def test_cli(self, tmp_path, monkeypatch, capsys):
        inp, man, out = write_case(tmp_path, '1100', {'steps': ['NOT']})
        monkeypatch.setattr(sys, 'argv', ['bitscope', inp, man, '-o', out, '--format', 'csv'])
        main()
        assert (tmp_path / 'out' / 'final.bits').read_text() == '0011'
        assert 'BITSCOPE PIPELINE' in capsys.readouterr().out

    def test_cli_quiet(self, tmp_path, monkeypatch, capsys):
        inp, man, out = write_case(tmp_path, '1100', {'steps': ['NOT']})
        monkeypatch.setattr(sys, 'argv', ['bitscope', inp, man, '-o', out, '-q'])
        main()
        assert capsys.readouterr().out == ''
