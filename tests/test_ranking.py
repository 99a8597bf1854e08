from flighter.rank.selector import rank, rank_flights
from flighter.types import Flight, PreferenceWeights


def _flight(fid, price, duration="2h 30m", stops=0, rating=4.0):
    return Flight(id=fid, price=price, duration=duration, stops=stops, rating=rating)


def test_price_weight_orders_cheapest_first():
    flights = [_flight("b", 245), _flight("c", 299), _flight("a", 189)]
    ranked = rank(flights, PreferenceWeights(price=3))
    assert [f.price for f in ranked] == [189, 245, 299]


def test_equal_scores_keep_input_order():
    flights = [_flight("first", 200), _flight("second", 200), _flight("third", 200)]
    ranked = rank(flights, PreferenceWeights(price=3, speed=1))
    assert [f.id for f in ranked] == ["first", "second", "third"]


def test_zero_weights_keep_input_order():
    flights = [_flight("x", 300), _flight("y", 100)]
    assert [f.id for f in rank(flights, PreferenceWeights())] == ["x", "y"]


def test_speed_weight_prefers_shorter_flights():
    flights = [_flight("slow", 100, duration="9h"), _flight("fast", 300, duration="3h 10m")]
    ranked = rank(flights, PreferenceWeights(speed=3))
    assert ranked[0].id == "fast"


def test_convenience_prefers_fewer_stops():
    flights = [_flight("two", 100, stops=2), _flight("one", 100, stops=1), _flight("none", 100, stops=0)]
    ranked = rank(flights, PreferenceWeights(convenience=3))
    assert [f.id for f in ranked] == ["none", "one", "two"]


def test_comfort_uses_absolute_rating():
    flights = [_flight("ok", 100, rating=3.5), _flight("great", 400, rating=5.0)]
    ranked = rank(flights, PreferenceWeights(comfort=3))
    assert ranked[0].id == "great"


def test_weights_trade_off():
    cheap_slow = _flight("cheap_slow", 150, duration="12h", stops=2)
    pricey_direct = _flight("pricey_direct", 400, duration="6h", stops=0)
    assert rank([pricey_direct, cheap_slow], PreferenceWeights(price=3))[0].id == "cheap_slow"
    assert rank([cheap_slow, pricey_direct],
                PreferenceWeights(speed=3, convenience=3))[0].id == "pricey_direct"


def test_single_flight():
    only = _flight("only", 250)
    assert rank([only], PreferenceWeights(price=3, comfort=1)) == [only]


def test_rank_flights_reads_preferences_from_utterance():
    flights = [_flight("c", 299), _flight("a", 189), _flight("b", 245)]
    ranked = rank_flights(flights, "cheapest flight from NYC to LA")
    assert [f.id for f in ranked] == ["a", "b", "c"]
