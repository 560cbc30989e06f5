"""
Tests for goodness_energy: collision counting and the hashed scratch file.
"""

import pytest

from goodness_energy import (
    ENERGY_UNAVAILABLE,
    collision_table,
    energy,
    energy_from_file,
    read_hashed_file,
    write_hashed_file,
)
from goodness_errors import InputUnavailable
from goodness_hash import REFERENCE_STATE, ShiftState, hash_words

SCENARIO_WORDS = ["a", "bb", "ccc"]
SCENARIO_STATE = ShiftState(1, 2, 3, 4)


@pytest.fixture
def scenario_hashes():
    return hash_words(SCENARIO_WORDS)


class TestScenario:
    """["a", "bb", "ccc"] under {1,2,3,4}, worked out by hand."""

    def test_base_hashes(self, scenario_hashes):
        assert scenario_hashes == (97, 3136, 98307)

    def test_buckets_size_4(self, scenario_hashes):
        # spread -> buckets 0, 1, 2
        table = collision_table(scenario_hashes, SCENARIO_STATE, 4)
        assert dict(table) == {0: 1, 1: 1, 2: 1}

    def test_no_collisions_size_4(self, scenario_hashes):
        assert energy(scenario_hashes, SCENARIO_STATE, 4) == 0.0

    def test_one_collision_size_2(self, scenario_hashes):
        # buckets 0, 1, 0
        assert dict(collision_table(scenario_hashes, SCENARIO_STATE, 2)) == {0: 2, 1: 1}
        assert energy(scenario_hashes, SCENARIO_STATE, 2) == 1.0

    def test_average_size_2(self, scenario_hashes):
        assert energy(scenario_hashes, SCENARIO_STATE, 2, average=True) == pytest.approx(0.5)

    def test_size_1_everything_collides(self, scenario_hashes):
        assert energy(scenario_hashes, SCENARIO_STATE, 1) == 2.0


class TestEnergy:
    def test_empty_input(self):
        assert energy((), REFERENCE_STATE, 16) == 0.0
        assert energy((), REFERENCE_STATE, 16, average=True) == 0.0

    def test_duplicates_always_collide(self):
        codes = hash_words(["same"] * 5)
        assert energy(codes, REFERENCE_STATE, 1024) == 4.0

    def test_non_negative(self, sample_words):
        codes = hash_words(sample_words)
        for size in (1, 8, 64, 4096):
            assert energy(codes, REFERENCE_STATE, size) >= 0
            assert energy(codes, REFERENCE_STATE, size, average=True) >= 0

    def test_bad_hash_collides_more(self, sample_words):
        good = hash_words(sample_words, "good")
        bad = hash_words(sample_words, "bad")
        # listen/silent/enlist/tinsel and stone/tones/notes/onset share a bad hash
        assert energy(bad, REFERENCE_STATE, 1 << 20) >= 6
        assert energy(good, REFERENCE_STATE, 1 << 20) < energy(bad, REFERENCE_STATE, 1 << 20)

    def test_does_not_mutate_input(self, sample_words):
        codes = hash_words(sample_words)
        before = tuple(codes)
        energy(codes, REFERENCE_STATE, 32)
        assert codes == before


class TestHashedFile:
    def test_write_then_read(self, tmp_path):
        path = tmp_path / "hashed"
        written = write_hashed_file(SCENARIO_WORDS, path)
        assert written == (97, 3136, 98307)
        assert path.read_text(encoding="utf-8") == "97\n3136\n98307\n"
        assert read_hashed_file(path) == written

    def test_energy_from_file_matches_memory(self, tmp_path, sample_words):
        path = tmp_path / "hashed"
        codes = write_hashed_file(sample_words, path)
        for average in (False, True):
            assert energy_from_file(path, REFERENCE_STATE, 64, average=average) == energy(
                codes, REFERENCE_STATE, 64, average=average
            )

    def test_missing_file_returns_sentinel(self, tmp_path):
        e = energy_from_file(tmp_path / "nope", REFERENCE_STATE, 64)
        assert e == ENERGY_UNAVAILABLE
        assert e < 0

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(InputUnavailable):
            read_hashed_file(tmp_path / "nope")

    def test_read_garbage_raises(self, tmp_path):
        path = tmp_path / "hashed"
        path.write_text("12\nnot-a-number\n", encoding="utf-8")
        with pytest.raises(InputUnavailable):
            read_hashed_file(path)

    def test_write_to_missing_directory_raises(self, tmp_path):
        path = tmp_path / "no_such_dir" / "hashed"
        with pytest.raises(InputUnavailable) as info:
            write_hashed_file(SCENARIO_WORDS, path)
        assert isinstance(info.value.__cause__, OSError)

    def test_write_bad_variant(self, tmp_path):
        path = tmp_path / "hashed"
        assert write_hashed_file(["ab", "ba"], path, "bad") == (195, 195)
        assert read_hashed_file(path) == (195, 195)

    @pytest.mark.parametrize("text", ["97\n-1\n", "4294967296\n", "97 99999999999\n"])
    def test_read_codes_outside_32_bits_raise(self, tmp_path, text):
        path = tmp_path / "hashed"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(InputUnavailable):
            read_hashed_file(path)
        assert energy_from_file(path, REFERENCE_STATE, 64) == ENERGY_UNAVAILABLE

    def test_read_largest_code(self, tmp_path):
        path = tmp_path / "hashed"
        path.write_text("0\n4294967295\n", encoding="utf-8")
        assert read_hashed_file(path) == (0, 4294967295)
