import pytest

from cpcenter.idgen import (
    DEFAULT_BASE_TIME_MS,
    ID_WORKERS,
    IdGenerator,
    next_id,
    set_id_generator,
)


def _worker_of(gen, value):
    return (value >> gen.seq_bit_length) & ((1 << gen.worker_id_bit_length) - 1)


def test_ids_strictly_increase_and_are_unique():
    gen = IdGenerator(3)
    ids = [gen.next_id() for _ in range(2000)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_worker_id_is_embedded():
    gen = IdGenerator(17)
    assert _worker_of(gen, gen.next_id()) == 17


def test_fixed_clock_overflows_sequence_without_duplicates():
    gen = IdGenerator(2, clock=lambda: DEFAULT_BASE_TIME_MS + 1000)
    ids = [gen.next_id() for _ in range(500)]
    assert len(set(ids)) == 500
    assert ids == sorted(ids)
    assert all(_worker_of(gen, i) == 2 for i in ids)


def test_clock_going_backwards_keeps_order():
    times = iter([DEFAULT_BASE_TIME_MS + 5000, DEFAULT_BASE_TIME_MS + 10])
    gen = IdGenerator(1, clock=lambda: next(times))
    first = gen.next_id()
    second = gen.next_id()
    assert second > first


@pytest.mark.parametrize("worker", [-1, 64])
def test_invalid_worker_id(worker):
    with pytest.raises(ValueError):
        IdGenerator(worker)


def test_clock_before_base_time_rejected():
    gen = IdGenerator(1, clock=lambda: DEFAULT_BASE_TIME_MS - 1)
    with pytest.raises(ValueError):
        gen.next_id()


def test_module_generator_uses_configured_worker():
    gen = set_id_generator(ID_WORKERS)
    value = next_id()
    assert _worker_of(gen, value) == ID_WORKERS
    assert next_id() > value


def test_module_generator_can_be_replaced():
    gen = set_id_generator(9)
    assert _worker_of(gen, next_id()) == 9
    set_id_generator(ID_WORKERS)