"""Tests for the PreviewRunner."""

import pytest

from pwgen_profiles.engine.password_engine import PasswordEngine
from pwgen_profiles.engine.preview_runner import PreviewOutcome, PreviewRunner
from pwgen_profiles.exceptions import GeneratorError
from pwgen_profiles.generators.registry import CustomGeneratorRegistry
from pwgen_profiles.profiles.base import GenerationProfile


class CountingGenerator:
    """Returns numbered passwords and records every call."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def generate(self, profile, entropy=None, registry=None):
        index = len(self.calls)
        self.calls.append((profile, entropy, registry))
        if index in self.fail_on:
            raise GeneratorError(f"failure {index}")
        return f"secret-{index}"


@pytest.fixture
def registry():
    return CustomGeneratorRegistry(register_defaults=False)


@pytest.fixture
def runner(registry):
    return PreviewRunner(registry)


@pytest.fixture
def profile():
    return GenerationProfile(length=6, char_set="abc")


class TestPreviewRunner:
    """Tests for PreviewRunner.run."""

    def test_full_batch(self, runner, profile):
        generator = CountingGenerator()

        outcomes = list(runner.run(profile, 5, generator))

        assert [o.reveal() for o in outcomes] == [f"secret-{i}" for i in range(5)]
        assert [o.index for o in outcomes] == [0, 1, 2, 3, 4]
        assert len(generator.calls) == 5

    def test_same_profile_and_registry_every_iteration(self, runner, registry, profile):
        generator = CountingGenerator()

        list(runner.run(profile, 3, generator))

        assert all(call == (profile, None, registry) for call in generator.calls)

    def test_progress_values(self, runner, profile):
        progress = []

        list(runner.run(profile, 5, CountingGenerator(), on_progress=progress.append))

        assert progress == [0, 20, 40, 60, 80, 100]

    def test_progress_with_uneven_count(self, runner, profile):
        progress = []

        list(runner.run(profile, 3, CountingGenerator(), on_progress=progress.append))

        assert progress == [0, 33, 66, 100]

    def test_zero_count(self, runner, profile):
        progress = []
        generator = CountingGenerator()

        assert list(runner.run(profile, 0, generator, on_progress=progress.append)) == []
        assert generator.calls == []
        assert progress == [100]

    def test_negative_count_rejected_on_call(self, runner, profile):
        generator = CountingGenerator()

        with pytest.raises(ValueError):
            runner.run(profile, -1, generator)
        assert generator.calls == []

    def test_cancellation(self, runner, profile):
        generator = CountingGenerator()
        progress = []

        outcomes = list(runner.run(
            profile,
            5,
            generator,
            on_progress=progress.append,
            is_cancelled=lambda: len(generator.calls) >= 2,
        ))

        assert len(outcomes) == 2
        assert len(generator.calls) == 2
        assert progress == [0, 20, 100]

    def test_cancelled_before_start(self, runner, profile):
        generator = CountingGenerator()

        outcomes = list(runner.run(profile, 5, generator, is_cancelled=lambda: True))

        assert outcomes == []
        assert generator.calls == []

    def test_generator_errors_do_not_stop_batch(self, runner, profile):
        generator = CountingGenerator(fail_on={1, 3})

        outcomes = list(runner.run(profile, 4, generator))

        assert [o.ok for o in outcomes] == [True, False, True, False]
        assert isinstance(outcomes[1].error, GeneratorError)
        with pytest.raises(GeneratorError):
            outcomes[3].reveal()

    def test_callback_exception_propagates(self, runner, profile):
        generator = CountingGenerator()

        def on_progress(value):
            if value >= 20:
                raise RuntimeError("display went away")

        with pytest.raises(RuntimeError):
            list(runner.run(profile, 5, generator, on_progress=on_progress))
        assert len(generator.calls) == 2

    def test_lazy(self, runner, profile):
        generator = CountingGenerator()

        batch = runner.run(profile, 5, generator)
        assert generator.calls == []

        next(batch)
        assert len(generator.calls) == 1

    def test_with_password_engine(self, runner):
        profile = GenerationProfile(length=10, char_set="0123456789")
        engine = PasswordEngine(runner.registry, seed=4)

        outcomes = list(runner.run(profile, 30, engine))

        assert len(outcomes) == 30
        assert all(o.ok and len(o.reveal()) == 10 for o in outcomes)


class TestPreviewOutcome:
    """Tests for PreviewOutcome."""

    def test_repr_hides_secret(self, runner, profile):
        outcome = next(runner.run(profile, 1, CountingGenerator()))

        assert "secret-0" not in repr(outcome)
        assert "secret-0" not in str(outcome.secret)
        assert outcome.reveal() == "secret-0"

    def test_failed_outcome(self):
        outcome = PreviewOutcome(2, error=GeneratorError("boom"))

        assert not outcome.ok
        assert "boom" in repr(outcome)
