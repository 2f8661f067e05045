"""Tests for identifier composition, validation and the builder API."""

from __future__ import annotations

import os
import re
import threading
from unittest.mock import patch

import pytest
from prometheus_client import REGISTRY

from puid import (
    ALPHABET,
    SEPARATOR,
    IdGenerator,
    InvalidEntropy,
    InvalidPrefix,
    Puid,
    PuidError,
    SequenceCounter,
    generate_id,
    get_default_generator,
    random_suffix,
    to_base36,
)

FIXED_MILLIS = 1651312057  # "rb5cjd"
FIXED_PID = 36  # "10"


def _fixed_generator(counter: SequenceCounter | None = None, **kwargs) -> IdGenerator:
    return IdGenerator(
        counter=counter if counter is not None else SequenceCounter(),
        clock=lambda: FIXED_MILLIS,
        pid=lambda: FIXED_PID,
        **kwargs,
    )


@pytest.fixture
def fresh_default_generator():
    get_default_generator.cache_clear()
    yield
    get_default_generator.cache_clear()


# ---------------------------------------------------------------------------
# Random suffix
# ---------------------------------------------------------------------------


class TestRandomSuffix:
    def test_alphabet(self):
        assert len(ALPHABET) == 62
        assert set(ALPHABET) == set(
            "abcdefghijklmnopqrstuvwxyz"
            "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
            "0123456789"
        )

    @pytest.mark.parametrize("length", [0, 1, 12, 24, 100])
    def test_exact_length(self, length):
        suffix = random_suffix(length)
        assert len(suffix) == length
        assert set(suffix) <= set(ALPHABET)

    def test_zero_is_empty(self):
        assert random_suffix(0) == ""

    def test_draws_differ(self):
        assert len({random_suffix(24) for _ in range(50)}) == 50

    @pytest.mark.parametrize("length", [-1, 1.5, "3", True])
    def test_invalid_length(self, length):
        with pytest.raises(InvalidEntropy):
            random_suffix(length)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class TestIdGenerator:
    def test_exact_composition(self):
        gen = _fixed_generator()
        assert gen.generate("foo", 0) == "foo_rb5cjd010"
        assert gen.generate("foo", 0) == "foo_rb5cjd110"

    def test_format(self):
        gen = IdGenerator(counter=SequenceCounter())
        ident = gen.generate("ch", 10)
        prefix, body = ident.split(SEPARATOR, 1)
        assert prefix == "ch"
        assert SEPARATOR not in body
        assert re.fullmatch(r"[0-9a-z]+[A-Za-z0-9]{10}", body)

    def test_suffix_length(self):
        gen = _fixed_generator()
        ident = gen.generate("x", 10)
        assert ident.startswith("x_rb5cjd010")
        assert len(ident) == len("x_rb5cjd010") + 10
        assert set(ident[-10:]) <= set(ALPHABET)

    def test_zero_length_ends_at_pid(self):
        gen = IdGenerator(counter=SequenceCounter())
        ident = gen.generate("x", 0)
        assert ident.endswith(to_base36(os.getpid()))

    def test_default_entropy(self):
        gen = _fixed_generator()
        assert len(gen.generate("x")) == len("x_rb5cjd010") + 12

        gen = _fixed_generator(default_entropy=24)
        assert len(gen.generate("x")) == len("x_rb5cjd010") + 24

    def test_counter_part_is_base36(self):
        gen = _fixed_generator(counter=SequenceCounter(start=255))
        assert gen.generate("x", 0) == "x_rb5cjd" + "73" + "10"
        assert gen.generate("x", 0) == "x_rb5cjd" + "0" + "10"

    def test_real_pid_is_encoded(self):
        gen = IdGenerator(counter=SequenceCounter(), clock=lambda: FIXED_MILLIS)
        assert gen.generate("x", 0) == "x_rb5cjd0" + to_base36(os.getpid())

    def test_non_random_parts_are_deterministic(self):
        """Same clock, counter value and pid: only the random tail differs."""
        first = _fixed_generator(counter=SequenceCounter(start=7)).generate("foo", 24)
        second = _fixed_generator(counter=SequenceCounter(start=7)).generate("foo", 24)
        assert first[:-24] == second[:-24] == "foo_rb5cjd710"
        assert first[-24:] != second[-24:]

    def test_generated_counter_increments(self):
        gen = IdGenerator(counter=SequenceCounter())
        before = REGISTRY.get_sample_value("puid_ids_generated_total")
        gen.generate("foo", 0)
        gen.generate("foo", 0)
        assert REGISTRY.get_sample_value("puid_ids_generated_total") == before + 2

    def test_unique_under_concurrency_within_one_tick(self):
        """256 threads in the same millisecond differ by the counter alone."""
        gen = _fixed_generator()
        results: list[str] = []
        results_lock = threading.Lock()
        barrier = threading.Barrier(256)

        def worker():
            barrier.wait()
            ident = gen.generate("foo", 0)
            with results_lock:
                results.append(ident)

        threads = [threading.Thread(target=worker) for _ in range(256)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 256
        assert len(set(results)) == 256

    def test_uses_process_counter_by_default(self):
        from puid.core.counter import get_sequence_counter

        assert IdGenerator().counter is get_sequence_counter()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("prefix", ["f", "fo", "foo", "quux", "b4r", "ABCD1234"])
    def test_valid_prefixes(self, prefix):
        ident = _fixed_generator().generate(prefix, 0)
        assert ident.split(SEPARATOR, 1)[0] == prefix

    @pytest.mark.parametrize(
        "prefix",
        ["", "a_b", "_", "b??z", "bäz", "with space", "toolong12", None, 42],
    )
    def test_invalid_prefixes(self, prefix):
        with pytest.raises(InvalidPrefix):
            _fixed_generator().generate(prefix, 0)

    def test_invalid_prefix_does_not_advance_counter(self):
        counter = SequenceCounter()
        with pytest.raises(InvalidPrefix):
            _fixed_generator(counter=counter).generate("a_b", 0)
        assert counter.value == 0

    def test_prefix_limit_is_configurable(self):
        gen = _fixed_generator(max_prefix_length=12)
        assert gen.generate("invoiceline1", 0).startswith("invoiceline1_")

    @pytest.mark.parametrize("length", [-1, 256, 2.0, "12", False])
    def test_invalid_random_length(self, length):
        with pytest.raises(InvalidEntropy):
            _fixed_generator().generate("foo", length)

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidPrefix, PuidError)
        assert issubclass(InvalidPrefix, ValueError)
        assert issubclass(InvalidEntropy, PuidError)
        assert issubclass(InvalidEntropy, ValueError)

    def test_error_message_names_prefix(self):
        with pytest.raises(InvalidPrefix, match="'a_b'"):
            _fixed_generator().generate("a_b")

    def test_rejections_counted(self):
        def sample():
            return REGISTRY.get_sample_value(
                "puid_rejections_total", {"reason": "prefix"}
            ) or 0.0

        before = sample()
        with pytest.raises(InvalidPrefix):
            _fixed_generator().generate("")
        assert sample() == before + 1

    def test_bad_default_entropy(self):
        with pytest.raises(InvalidEntropy):
            IdGenerator(counter=SequenceCounter(), default_entropy=-1)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TestBuilder:
    def test_build(self):
        ident = Puid.builder(_fixed_generator()).prefix("foo").build()
        assert ident.startswith("foo_rb5cjd010")
        assert len(ident) == len("foo_rb5cjd010") + 12

    def test_entropy(self):
        ident = Puid.builder(_fixed_generator()).prefix("bar").entropy(24).build()
        assert len(ident) == len("bar_rb5cjd010") + 24

    def test_prefix_validated_eagerly(self):
        builder = Puid.builder(_fixed_generator())
        with pytest.raises(InvalidPrefix):
            builder.prefix("b??z")

    def test_entropy_validated_eagerly(self):
        builder = Puid.builder(_fixed_generator())
        with pytest.raises(InvalidEntropy):
            builder.entropy(-3)

    def test_build_without_prefix(self):
        with pytest.raises(InvalidPrefix):
            Puid.builder(_fixed_generator()).build()

    def test_default_generator(self):
        assert Puid.builder().prefix("test").build().startswith("test_")


# ---------------------------------------------------------------------------
# Module-level default
# ---------------------------------------------------------------------------


class TestGenerateId:
    def test_default_length(self):
        ident = generate_id("foo")
        assert re.fullmatch(r"foo_[0-9a-z]+[A-Za-z0-9]{12}", ident)

    def test_custom_length(self):
        ident = generate_id("bar", 24)
        assert re.fullmatch(r"bar_[0-9a-z]+[A-Za-z0-9]{24}", ident)

    def test_consecutive_ids_differ(self):
        ids = {generate_id("foo", 0) for _ in range(200)}
        assert len(ids) == 200

    def test_invalid(self):
        with pytest.raises(InvalidPrefix):
            generate_id("")
        with pytest.raises(InvalidEntropy):
            generate_id("foo", -1)

    def test_default_generator_is_singleton(self, fresh_default_generator):
        assert get_default_generator() is get_default_generator()

    def test_default_generator_reads_config(self, fresh_default_generator):
        with patch.dict(os.environ, {"PUID_GENERATOR__DEFAULT_ENTROPY": "20"}):
            gen = get_default_generator()
        assert gen.default_entropy == 20
        assert re.fullmatch(r"foo_[0-9a-z]+[A-Za-z0-9]{20}", generate_id("foo"))
