from bandsim.domain.policy import GatePolicy, performance_gate, shop_gate, work_gate


def test_work_allowed_until_last_hour_inclusive():
    assert work_gate(818, 100) is None
    assert work_gate(819, 100) is not None


def test_work_refused_when_mental_low():
    assert work_gate(810, 29) == "Mental is too low to work."
    assert work_gate(810, 30) is None


def test_work_cutoff_is_configurable():
    strict = GatePolicy(work_last_hour=17)
    assert work_gate(818, 100, strict) is not None
    assert work_gate(817, 100, strict) is None


def test_performance_window():
    assert performance_gate(812, 100) is not None
    assert performance_gate(813, 100) is None
    assert performance_gate(818, 100) is None
    assert performance_gate(819, 100) is not None


def test_performance_refused_when_mental_low():
    assert performance_gate(815, 10) == "Mental is too low to perform."


def test_shop_window():
    assert shop_gate(808) is not None
    assert shop_gate(809) is None
    assert shop_gate(818) is None
    assert shop_gate(819) is not None
    assert shop_gate(819, GatePolicy(shop_close_hour=20)) is None
