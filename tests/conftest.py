import pytest

import assembler.assembler
from assembler.singleton import SingletonSlot


@pytest.fixture
def shared_instances(monkeypatch) -> SingletonSlot:
    slot = SingletonSlot()
    monkeypatch.setattr(assembler.assembler, "shared_instances", slot)
    return slot
