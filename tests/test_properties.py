from flownodes.properties import Properties


def test_put_then_get_returns_value():
    props = Properties()
    props.put("label", "hello")
    assert props.get("label", str) == "hello"


def test_get_converts_when_possible():
    props = Properties()
    props.put("count", "12")
    assert props.get("count", int) == 12


def test_get_missing_returns_none():
    assert Properties().get("absent", int) is None


def test_get_inconvertible_returns_none():
    props = Properties()
    props.put("count", "twelve")
    assert props.get("count", int) is None


def test_put_overwrites_and_values_exposes_store():
    props = Properties()
    props.put("x", 1)
    props.put("x", 2)
    assert props.values == {"x": 2}