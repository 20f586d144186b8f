import pytest

from operations.scheduler import TrainScheduler, DEFAULT_PEAK_SPECIALS
from world.transit import TrainStatus, InvalidStation


def check_heap_invariant(scheduler):
    trains = scheduler._heap.to_list()
    for ii in range(1, len(trains)):
        parent = (ii - 1) // 2
        assert trains[parent].arrival_time <= trains[ii].arrival_time


@pytest.fixture
def scheduler():
    scheduler = TrainScheduler(n_stations=4)
    scheduler.schedule(101, "X", 540, 0)
    scheduler.schedule(102, "Y", 480, 3)
    scheduler.schedule(103, "Z", 600, 1)
    return scheduler


def test_two_trains():
    scheduler = TrainScheduler(n_stations=2)
    scheduler.schedule(1, "X", 540, 0)
    scheduler.schedule(2, "Y", 480, 1)
    check_heap_invariant(scheduler)
    trains = scheduler.upcoming()
    assert [tt.train_id for tt in trains] == [2, 1]
    assert [tt.arrival_time for tt in trains] == [480, 540]
    # upcoming() leaves the schedule untouched
    assert len(scheduler) == 2
    assert [tt.train_id for tt in scheduler.upcoming()] == [2, 1]


def test_upcoming_order(scheduler):
    trains = scheduler.upcoming()
    assert [tt.name for tt in trains] == ["Y", "X", "Z"]
    times = [tt.arrival_time for tt in trains]
    assert times == sorted(times)


def test_upcoming_leaves_schedule_alone(scheduler):
    first = scheduler.upcoming()
    assert len(scheduler) == 3
    second = scheduler.upcoming()
    assert [tt.train_id for tt in first] == [tt.train_id for tt in second]


def test_many_trains_come_out_sorted():
    scheduler = TrainScheduler(n_stations=1)
    times = [(ii * 37) % 1440 for ii in range(200)]
    for ii, arrival in enumerate(times):
        scheduler.schedule(ii, f"train {ii}", arrival, 0)
    check_heap_invariant(scheduler)
    upcoming = [tt.arrival_time for tt in scheduler.upcoming()]
    assert upcoming == sorted(times)
    check_heap_invariant(scheduler)


def test_empty_schedule():
    scheduler = TrainScheduler(n_stations=1)
    assert scheduler.upcoming() == []
    assert len(scheduler) == 0


def test_schedule_validation(scheduler):
    with pytest.raises(ValueError):
        scheduler.schedule(1, "late", 1440, 0)
    with pytest.raises(ValueError):
        scheduler.schedule(1, "early", -1, 0)
    with pytest.raises(InvalidStation):
        scheduler.schedule(1, "nowhere", 500, 4)
    assert len(scheduler) == 3

    with pytest.raises(InvalidStation):
        scheduler.schedule(1, "ghost", 500, -7)
    with pytest.raises(InvalidStation):
        scheduler.trains_at_station(-7)
    assert len(scheduler) == 3
    with pytest.raises(TypeError):
        # the station count is required
        TrainScheduler()


def test_trains_at_station(scheduler):
    scheduler.schedule(104, "W", 420, 0)
    at_zero = scheduler.trains_at_station(0)
    assert [tt.name for tt in at_zero] == ["W", "X"]
    assert scheduler.trains_at_station(2) == []
    with pytest.raises(InvalidStation):
        scheduler.trains_at_station(5)


def test_optimize_frequency_peak(scheduler):
    added = scheduler.optimize_frequency(True)
    assert [tt.train_id for tt in added] == [901, 902]
    assert len(scheduler) == 5
    check_heap_invariant(scheduler)
    names = [tt.name for tt in scheduler.upcoming()]
    # Peak Special 1 ties with X at 540, so either may come first
    assert names == ["Y", "X", "Peak Special 1", "Peak Special 2", "Z"] or \
        names == ["Y", "Peak Special 1", "X", "Peak Special 2", "Z"]


def test_optimize_frequency_off_peak(scheduler):
    assert scheduler.optimize_frequency(False) == []
    assert len(scheduler) == 3


def test_custom_peak_specials():
    scheduler = TrainScheduler(3, peak_specials=[(7, "Extra", 450, 2)])
    added = scheduler.optimize_frequency(True)
    assert len(added) == 1
    assert added[0].arrival_time == 450
    assert added[0].next_station_id == 2
    assert len(DEFAULT_PEAK_SPECIALS) == 2


def test_set_status(scheduler):
    assert scheduler.set_status(101, TrainStatus.DELAYED) == 1
    assert scheduler.set_status(103, "cancelled") == 1
    assert scheduler.set_status(999, TrainStatus.DELAYED) == 0
    statuses = {tt.train_id: tt.status for tt in scheduler.upcoming()}
    assert statuses == {101: TrainStatus.DELAYED, 102: TrainStatus.ON_TIME,
                        103: TrainStatus.CANCELLED}
    with pytest.raises(KeyError):
        scheduler.set_status(101, "lost")
