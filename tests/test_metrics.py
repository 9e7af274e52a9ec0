"""
Tests for bitscope metric engines and the metric registry.

Degenerate inputs (empty, all-zero, all-one, lengths not a multiple of 8)
must produce finite values, never NaN/Inf.
"""

import math

import numpy as np
import pytest

from bitscope.core.metrics import (
    advanced,
    basic,
    byte_level,
    entropy,
    ideality,
    partitions,
    patterns,
    periodicity,
    randomness,
    runs,
    spectral,
    transitions,
)
from bitscope.core.registry import (
    compute_all_metrics,
    compute_metric,
    get_registry,
    metric_names,
)
from bitscope.primitives import (
    byte_values_to_bits,
    direct_dft_magnitudes,
    dft_magnitudes,
    shannon_entropy,
)
from bitscope.validation import InvalidCharacterError, InvalidParameterError, UnknownMetricError


def random_bits(n, seed=42):
    rng = np.random.RandomState(seed)
    return ''.join(rng.choice(['0', '1'], size=n))


DEGENERATE = {
    'empty': '',
    'single': '1',
    'all_zero': '0' * 64,
    'all_one': '1' * 64,
    'unaligned': '1011001',
    'random_unaligned': random_bits(77),
}


class TestBasic:
    """Counts, parity and checksums."""

    def test_crc32_known_vector(self):
        bits = byte_values_to_bits(b'123456789')
        assert basic.compute(bits)['crc32'] == 0xCBF43926
        assert basic.crc32(list(b'123456789')) == 0xCBF43926
        assert basic.crc32([]) == 0

    def test_counts(self):
        m = basic.compute('11110000')
        assert m['total_bits'] == 8
        assert m['total_bytes'] == 1
        assert m['one_count'] == 4
        assert m['zero_percentage'] == 50.0
        assert m['bit_density'] == 0.5
        assert m['parity'] == 0
        assert m['checksum_8bit'] == 240

    def test_alignment(self):
        m = basic.compute('101')
        assert m['byte_alignment'] == 3
        assert m['padding_bits'] == 5
        assert m['total_bytes'] == 0
        assert basic.compute('1')['parity'] == 1


class TestEntropy:
    """Entropy family bounds and degenerate cases."""

    def test_constant_bytes_zero(self):
        assert entropy.compute('0' * 64)['shannon_entropy'] == 0
        assert entropy.compute('1' * 64)['shannon_entropy'] == 0

    def test_uniform_bytes_eight_bits(self):
        bits = byte_values_to_bits(list(range(256)) * 2)
        assert entropy.compute(bits)['shannon_entropy'] == pytest.approx(8.0)

    def test_large_random_approaches_eight(self):
        np.random.seed(42)
        values = np.random.randint(0, 256, size=100_000)
        h = shannon_entropy(np.bincount(values, minlength=256))
        assert abs(h - 8.0) < 0.05

    def test_renyi_ordering(self):
        """min <= collision <= shannon <= hartley."""
        m = entropy.compute(random_bits(2048))
        assert 0 <= m['min_entropy'] <= m['collision_entropy'] + 1e-12
        assert m['collision_entropy'] <= m['shannon_entropy'] + 1e-12
        assert m['shannon_entropy'] <= m['hartley_entropy'] + 1e-12
        assert m['hartley_entropy'] <= 8.0
        assert m['renyi_entropy'] == pytest.approx(m['collision_entropy'])

    def test_pair_measures(self):
        m = entropy.compute(random_bits(1024))
        assert m['conditional_entropy'] >= 0
        assert m['mutual_information'] >= 0
        assert m['joint_entropy'] >= m['conditional_entropy']

    def test_regular_input_has_low_apen(self):
        periodic = entropy.compute('01' * 128)
        noisy = entropy.compute(random_bits(256))
        assert periodic['approximate_entropy'] < noisy['approximate_entropy']

    def test_lz77_compresses_repetition(self):
        assert entropy.kolmogorov_estimate('0' * 512) < entropy.kolmogorov_estimate(random_bits(512))

    def test_approximate_entropy_known_value(self):
        """'01010101', m=2: Phi_2 over 4x'01' 3x'10', Phi_3 over 3x'010' 3x'101'."""
        phi_2 = (4 * math.log(4 / 7) + 3 * math.log(3 / 7)) / 7
        phi_3 = math.log(0.5)
        assert entropy.approximate_entropy('01010101', 2) == pytest.approx(phi_2 - phi_3)

    def test_sample_entropy_known_value(self):
        """'00010001', m=2: B = 6 matching pairs, A = 2."""
        assert entropy.sample_entropy('00010001', 2, 0.2) == pytest.approx(math.log(3))

    def test_regularity_sentinels(self):
        assert entropy.approximate_entropy('0' * 32) == 0.0
        assert entropy.sample_entropy('1' * 32) == 0.0
        assert entropy.sample_entropy('01') == 0.0
        assert entropy.sample_entropy('0101') == 0.0, "no matching templates gives the 0 sentinel"
        assert entropy.permutation_entropy('01', 3) == 0.0

    def test_permutation_entropy_known_value(self):
        assert entropy.permutation_entropy('01010', 2) == pytest.approx(1.0)
        h = -(2 / 3 * math.log2(2 / 3) + 1 / 3 * math.log2(1 / 3))
        assert entropy.permutation_entropy('0101', 2) == pytest.approx(h)
        assert entropy.permutation_entropy('0' * 16, 3) == 0.0

    def test_spectral_entropy_known_value(self):
        assert entropy.spectral_entropy([1, 0, 0, 0]) == pytest.approx(2.0)
        assert entropy.spectral_entropy([0, 1, 0, 1]) == pytest.approx(1.0)
        assert entropy.spectral_entropy([1, 1]) == 0.0
        assert entropy.spectral_entropy([]) == 0.0

    def test_block_entropy_known_value(self):
        h = -(2 / 3 * math.log2(2 / 3) + 1 / 3 * math.log2(1 / 3))
        assert entropy.block_entropy([1, 2, 1, 2, 3, 4], block_size=2) == pytest.approx(h)
        assert entropy.block_entropy([5] * 16) == 0.0


class TestRandomness:
    """Normalised test statistics."""

    def test_balanced_frequency(self):
        assert randomness.compute('01' * 32)['frequency_test'] == 0.0

    def test_constant_runs_test(self):
        m = randomness.compute('1' * 64)
        assert m['runs_test'] == 0.0
        assert m['serial_correlation'] == 0.0

    def test_birthday_spacings(self):
        bits = byte_values_to_bits([7, 7, 7, 7])
        assert randomness.compute(bits)['birthday_spacings'] == 0.75

    def test_chi_squared_known_value(self):
        assert randomness.chi_squared([0, 0]) == pytest.approx(510.0)
        assert randomness.chi_squared(list(range(256))) == 0.0
        assert randomness.chi_squared([]) == 0.0

    def test_runs_test_known_value(self):
        """'0011': 2 runs against mu = 3, var = 2/3."""
        assert randomness.runs_test('0011') == pytest.approx(math.sqrt(1.5))

    def test_longest_run_test_known_value(self):
        assert randomness.longest_run_test('00011010') == pytest.approx(1.0)
        assert randomness.longest_run_test('0101') == pytest.approx(0.5)
        assert randomness.longest_run_test('1') == 0.0


class TestRuns:
    """Run-length statistics per symbol."""

    def test_run_statistics(self):
        m = runs.compute('0011101')
        assert m['run_count_0'] == 2
        assert m['median_run_length_0'] == 1.5
        assert m['mean_run_length_1'] == 2.0
        assert m['max_run_length_1'] == 3
        assert m['min_run_length_1'] == 1
        assert m['run_length_variance_1'] == 1.0

    def test_missing_symbol(self):
        m = runs.compute('1111')
        assert m['run_count_0'] == 0
        assert m['mean_run_length_0'] == 0


class TestPatterns:
    """Pattern and compression estimates."""

    def test_constant(self):
        m = patterns.compute('0' * 64)
        assert m['unique_4bit_patterns'] == 1
        assert m['alphabet_size'] == 1
        assert m['redundancy_percentage'] == 100.0

    def test_byte_frequency(self):
        bits = byte_values_to_bits([5, 5, 5, 9])
        m = patterns.compute(bits)
        assert m['most_frequent_byte'] == 5
        assert m['least_frequent_byte'] == 9

    def test_huffman_ratio_bounds(self):
        m = patterns.compute(random_bits(2048))
        assert 0 < m['compression_ratio_estimate'] <= 1.0


class TestTransitions:
    """Transition counts."""

    def test_counts(self):
        m = transitions.compute('0110')
        assert m['zero_to_one_transitions'] == 1
        assert m['one_to_zero_transitions'] == 1
        assert m['total_transitions'] == 2
        assert m['transition_density'] == pytest.approx(2 / 3)
        assert m['edge_density'] == 0.5
        assert m['transition_ratio'] == 1.0

    def test_constant_has_no_transitions(self):
        assert transitions.compute('1' * 16)['total_transitions'] == 0


class TestPeriodicity:
    """Autocorrelation and correlation measures."""

    def test_alternating_lag_one_negative(self):
        m = periodicity.compute('01' * 32)
        assert m['autocorrelation_lag_1'] == pytest.approx(-math.sqrt(15.75))
        assert m['autocorrelation_lag_8'] > 0
        assert m['serial_correlation_coefficient'] == m['autocorrelation_lag_1']

    def test_constant_is_zero(self):
        m = periodicity.compute('1' * 64)
        assert m['autocorrelation_lag_1'] == 0.0

    def test_cross_correlation(self):
        assert periodicity.compute('10101010')['cross_correlation_score'] == 1.0
        assert periodicity.compute('11110000')['cross_correlation_score'] == 0.0

    def test_keys_match_catalog(self):
        """Output keys are fixed whatever the input or configuration."""
        assert list(periodicity.compute('0011' * 8)) == periodicity.OUTPUTS
        assert set(patterns.compute(random_bits(128))) == set(patterns.OUTPUTS)
        for name in ('autocorrelation_lag_16', 'unique_16bit_patterns', 'fourgram_diversity'):
            assert compute_metric(name, '0011' * 8).success, name

    def test_durbin_watson(self):
        assert periodicity.durbin_watson([0, 255]) == pytest.approx(1.0)
        assert periodicity.durbin_watson([1, 2, 3]) == pytest.approx(2 / 14)
        assert periodicity.durbin_watson([0, 0, 0]) == 0.0
        bits = byte_values_to_bits([1, 2, 3])
        assert periodicity.compute(bits)['durbin_watson_statistic'] == pytest.approx(1 / 7)


class TestSpectral:
    """FFT spectrum measures."""

    def test_fft_matches_direct_dft(self):
        np.random.seed(42)
        values = np.random.randint(0, 256, size=97)
        assert np.allclose(dft_magnitudes(values), direct_dft_magnitudes(values))

    def test_dominant_period(self):
        bits = byte_values_to_bits([0, 0, 255, 255] * 16)
        m = spectral.compute(bits)
        assert m['dominant_period'] == pytest.approx(4.0)
        assert m['periodicity_strength'] > 1.0

    def test_bounds(self):
        m = spectral.compute(random_bits(4096))
        assert 0 <= m['spectral_flatness'] <= 1.0
        assert 0 <= m['spectral_rolloff'] < 1.0
        assert m['spectral_flux'] > 0

    def test_centroid_and_rolloff(self):
        mags = dft_magnitudes([1, 0, 0, 0])
        assert spectral.spectral_centroid(mags) == pytest.approx(1.5)
        assert spectral.spectral_rolloff(mags, 0.85) == pytest.approx(0.75)
        assert spectral.spectral_rolloff(mags, 0.5) == pytest.approx(0.25)
        assert spectral.spectral_centroid(dft_magnitudes([0, 1, 0, 1])) == pytest.approx(1.0)

    def test_flux_known_value(self):
        """Windows [1, 0] -> |X| = [1, 1] and [1, 1] -> |X| = [2, 0]; three windows in total."""
        flux = spectral.spectral_flux([1, 0, 1, 1, 0, 0], window=2)
        assert flux == pytest.approx(math.sqrt(2) / 3)
        assert spectral.spectral_flux([1, 2, 3], window=4) == 0.0


class TestPartitions:
    """Partition aggregates."""

    def test_empty(self):
        m = partitions.compute('', [])
        assert all(v == 0.0 for v in m.values())
        assert set(m) == set(partitions.OUTPUTS)

    def test_aggregates(self):
        parts = [
            {'start': 0, 'end': 10, 'entropy': 0.5},
            partitions.Partition(10, 30, 1.5),
            (30, 40, 1.0),
        ]
        m = partitions.compute('', parts)
        assert m['partition_count'] == 3
        assert m['mean_partition_size'] == pytest.approx(40 / 3)
        assert m['partition_size_variance'] == pytest.approx(200 / 9)
        assert m['smallest_partition'] == 10
        assert m['largest_partition'] == 20
        assert m['partition_entropy_variance'] == pytest.approx(1 / 6)
        assert m['inter_partition_similarity'] == pytest.approx(0.25)
        assert m['partition_boundary_sharpness'] == pytest.approx(1.0)
        assert m['partition_homogeneity'] == pytest.approx(1 - (1 / 6) / 1.5)
        assert m['partition_complexity_score'] == pytest.approx(0.5)

    def test_malformed(self):
        with pytest.raises(InvalidParameterError):
            partitions.compute('', [{'start': 0}])

    @pytest.mark.parametrize('item', [
        {'start': 'x', 'end': 2, 'entropy': 1.0},
        {'start': 0, 'end': 2, 'entropy': None},
        (0, 'two', 1.0),
        [0, 2, 'high'],
    ])
    def test_non_numeric_fields(self, item):
        with pytest.raises(InvalidParameterError):
            partitions.as_partition(item)
        with pytest.raises(InvalidParameterError):
            compute_all_metrics('0101', [item])


class TestAdvanced:
    """Dynamical and complexity estimators."""

    def test_lyapunov_is_zero_for_bits(self):
        assert advanced.compute(random_bits(512))['lyapunov_exponent'] == 0.0

    def test_hurst_sentinels(self):
        assert advanced.hurst_exponent(np.array([7] * 20)) == 0.5
        assert advanced.hurst_exponent(np.array([7])) == 0.0

    def test_hurst_known_value(self):
        """[0, 0, 3]: cumulative deviations [-1, -2, 0], R = 2, S = sqrt(2)."""
        expected = math.log(2 / math.sqrt(2)) / math.log(3)
        assert advanced.hurst_exponent(np.array([0, 0, 3])) == pytest.approx(expected)

    def test_fractal_dimension_known_value(self):
        """All ones: 7 occupied 2-bit boxes, 3 occupied 4-bit boxes, slope -1."""
        assert advanced.fractal_dimension('1' * 16, (2, 4)) == pytest.approx(1.0)
        assert advanced.fractal_dimension('0' * 16, (2, 4)) == 0.0

    def test_predictability(self):
        assert advanced.predictability('0' * 32) == 1.0
        assert advanced.predictability('01' * 16) == 1.0
        assert advanced.predictability('01') == 0.0

    def test_constant_bytes(self):
        m = advanced.compute('0' * 32)
        assert m['minimum_description_length'] == 8.0
        assert m['signal_to_noise_ratio'] == 0.0
        assert m['noise_level_estimate'] == 0.0
        assert m['local_complexity_measure'] == pytest.approx(1 / 29)

    def test_noise_level(self):
        assert advanced.noise_level([0, 255, 0, 255]) == 255.0

    def test_information_density(self):
        bits = byte_values_to_bits(list(range(256)))
        assert advanced.compute(bits)['information_density'] == pytest.approx(1.0)


class TestByteLevel:
    """Byte-view statistics."""

    def test_stats(self):
        bits = byte_values_to_bits(b'A\x0f\x00\xff')
        m = byte_level.compute(bits)
        assert m['ascii_printable_percentage'] == 25.0
        assert m['null_byte_count'] == 1
        assert m['high_entropy_byte_count'] == 1
        assert m['low_entropy_byte_count'] == 2
        assert m['byte_value_range'] == 255
        assert m['byte_value_mean'] == pytest.approx((65 + 15 + 0 + 255) / 4)

    def test_ngrams(self):
        m = byte_level.compute(byte_values_to_bits([1, 1, 1]))
        assert m['bigram_probability'] == 1.0
        assert m['trigram_probability'] == 1.0
        assert byte_level.compute(byte_values_to_bits([1, 2]))['trigram_probability'] == 0.0


class TestIdeality:
    """Repeating-window coverage."""

    def test_examples(self):
        assert ideality.calculate_ideality('1010', 2).ideality_percentage == 100
        assert ideality.calculate_ideality('100110', 2).ideality_percentage == 0
        r = ideality.calculate_ideality('100110', 1)
        assert r.repeating_count == 4
        assert r.ideality_percentage == 66

    def test_short_section(self):
        r = ideality.calculate_ideality('101', 2)
        assert r.ideality_percentage == 0
        assert r.total_bits == 3

    def test_top_windows(self):
        top = ideality.top_ideality_windows('1010' * 4, 3)
        assert [r.window_size for r in top] == [2, 4, 8]

    def test_compute(self):
        m = ideality.compute('10' * 16)
        assert m['ideality_percentage'] == 100
        assert m['ideality_window'] == 2
        assert ideality.compute('') == {'ideality_percentage': 0.0, 'ideality_window': 0.0}


class TestRegistry:
    """Catalog lookup and aggregate computation."""

    def test_catalog_size(self):
        names = metric_names()
        assert len(names) == len(set(names))
        assert len(names) >= 100

    def test_all_metrics_keys(self):
        m = compute_all_metrics(random_bits(256))
        assert set(m) == set(metric_names())

    def test_scenario_zero_byte(self):
        assert compute_all_metrics('00000000')['shannon_entropy'] == 0

    def test_empty_is_all_zero(self):
        m = compute_all_metrics('')
        nonzero = {k: v for k, v in m.items() if v != 0}
        assert nonzero == {}, f"Empty input should give sentinel zeros: {nonzero}"

    @pytest.mark.parametrize('label', sorted(DEGENERATE))
    def test_degenerate_inputs_are_finite(self, label):
        m = compute_all_metrics(DEGENERATE[label])
        bad = {k: v for k, v in m.items() if not math.isfinite(v)}
        assert bad == {}, f"{label}: non-finite metrics {bad}"

    def test_partitions_passed_through(self):
        m = compute_all_metrics('0101', [{'start': 0, 'end': 2, 'entropy': 1.0}])
        assert m['partition_count'] == 1

    def test_invalid_bits_raise(self):
        with pytest.raises(InvalidCharacterError):
            compute_all_metrics('0120')

    def test_compute_metric(self):
        result = compute_metric('shannon_entropy', '0000000011111111')
        assert result.success
        assert result.value == pytest.approx(1.0)
        assert result.raise_for_error() == pytest.approx(1.0)

    def test_compute_metric_unknown(self):
        result = compute_metric('nonsense', '01')
        assert not result.success
        assert isinstance(result.error, UnknownMetricError)
        with pytest.raises(KeyError):
            result.raise_for_error()

    def test_compute_metric_invalid_bits(self):
        result = compute_metric('shannon_entropy', '012')
        assert isinstance(result.error, InvalidCharacterError)

    def test_non_finite_values_replaced(self, monkeypatch, caplog):
        registry = get_registry()
        monkeypatch.setitem(registry._compute_funcs, 'basic', lambda bits: {'total_bits': float('nan')})
        with caplog.at_level('WARNING'):
            m = compute_all_metrics('01')
        assert m['total_bits'] == 0.0
        assert 'non-finite' in caplog.text

    def test_lookup(self):
        registry = get_registry()
        assert registry.has_metric('shannon_entropy')
        assert not registry.has_metric('nonsense')
        assert registry.group_of('shannon_entropy') == 'entropy'
        assert 'total_bits' in registry.get_outputs('basic')

    def test_error_to_dict(self):
        result = compute_metric('shannon_entropy', '012')
        d = result.error.to_dict()
        assert d['kind'] == 'InvalidCharacterError'
        assert d['index'] == 2
        assert d['char'] == '2'
