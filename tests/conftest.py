import pytest


class ScriptedRandom:
    """Uniform source that replays a fixed list and fails when it runs dry."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self):
        if self.calls >= len(self._values):
            raise AssertionError("scripted random stream exhausted")
        v = self._values[self.calls]
        self.calls += 1
        return v


class ConstantRandom:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


class ExplodingRandom:
    def random(self):
        raise AssertionError("no random draw expected")


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def constant():
    return ConstantRandom


@pytest.fixture
def exploding():
    return ExplodingRandom()
