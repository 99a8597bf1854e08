from flighter.parse.route import clean_place, extract_route


def test_flights_from_to_with_price_terminator():
    route = extract_route("flights from Chicago to London under $400")
    assert route.origin == "ORD"
    assert route.destination == "LHR"


def test_bare_x_to_y_with_date():
    route = extract_route("New York to Paris July 28")
    assert (route.origin, route.destination) == ("JFK", "CDG")


def test_permissive_fallback_without_terminator():
    route = extract_route("cheapest flight from NYC to LA")
    assert (route.origin, route.destination) == ("JFK", "LAX")


def test_multi_word_cities():
    route = extract_route("flights from San Francisco to Hong Kong on july 4")
    assert (route.origin, route.destination) == ("SFO", "HKG")


def test_stop_words_are_removed():
    route = extract_route("find flights from boston to miami")
    assert (route.origin, route.destination) == ("BOS", "MIA")
    assert clean_place("cheap flights london,") == "london"
    assert clean_place("get tickets  new york.") == "new york"


def test_unknown_city_keeps_phrase_but_no_code():
    route = extract_route("I want to fly from Atlantis to London")
    assert route.origin == ""
    assert route.origin_text == "atlantis"
    assert route.destination == "LHR"


def test_no_route():
    route = extract_route("hello there")
    assert route.origin == "" and route.destination == ""
    assert route.origin_text == "" and route.destination_text == ""
