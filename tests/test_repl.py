import io

import pytest

from pokedexcli.api import (
    ApiError,
    ListLocationAreas,
    LocationArea,
    LocationAreaEncounter,
    NamedAPIResource,
    Pokemon,
    PokemonEncounter,
    Stat,
    TypeSlot,
)
from pokedexcli.repl import (
    CommandError,
    Session,
    chance_by_base_experience,
    clean_input,
    run,
)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value


class FakeClient:
    def __init__(self):
        self.requested_pages = []
        self.pages = {
            "": ListLocationAreas(
                next="page2",
                previous="",
                results=[LocationArea(name="area-a"), LocationArea(name="area-b")],
            ),
            "page2": ListLocationAreas(
                next="page3",
                previous="page1",
                results=[LocationArea(name="area-c")],
            ),
            "page1": ListLocationAreas(
                next="page2",
                previous="",
                results=[LocationArea(name="area-a")],
            ),
        }

    def list_location_areas(self, url=""):
        self.requested_pages.append(url)
        return self.pages[url]

    def pokemon_in_area(self, area):
        if area == "nowhere":
            raise ApiError("Request failed with status: 404 Not Found")
        return [
            PokemonEncounter(pokemon=NamedAPIResource(name="tentacool")),
            PokemonEncounter(pokemon=NamedAPIResource(name="pikachu")),
        ]

    def pokemon_encounters(self, pokemon_name):
        if pokemon_name == "pikachu":
            return [
                LocationAreaEncounter(location_area=LocationArea(name="canalave-city-area"))
            ]
        return []

    def get_pokemon(self, pokemon_name):
        return Pokemon(
            name=pokemon_name,
            base_experience=112,
            height=4,
            weight=60,
            stats=[
                Stat(base_stat=35, stat=NamedAPIResource(name="hp")),
                Stat(base_stat=55, stat=NamedAPIResource(name="attack")),
            ],
            types=[TypeSlot(slot=1, type=NamedAPIResource(name="electric"))],
        )


def make_session(roll=99):
    out = io.StringIO()
    return Session(FakeClient(), out=out, rng=FixedRng(roll)), out


@pytest.mark.parametrize(
    "text, expected",
    [
        (" hello  world  ", ["hello", "world"]),
        ("   multiple    spaces   here   ", ["multiple", "spaces", "here"]),
        ("", []),
        ("   ", []),
        ("Catch PIKACHU", ["catch", "pikachu"]),
    ],
)
def test_clean_input(text, expected):
    assert clean_input(text) == expected


@pytest.mark.parametrize(
    "experience, chance",
    [(0, 80), (99, 80), (100, 60), (199, 60), (200, 40), (608, 40)],
)
def test_chance_by_base_experience(experience, chance):
    assert chance_by_base_experience(experience) == chance


def test_help_lists_commands():
    session, out = make_session()
    session.help()
    text = out.getvalue()
    assert text.startswith("Welcome to the Pokedex!\nUsage:\n\n")
    assert "exit: Exit the Pokedex\n" in text
    assert "explore <area>: Explore the area and list the Pokemons\n" in text
    assert "pokedex: Shows the list of pokemons you already got\n" in text


def test_map_pages_forward_and_back():
    session, out = make_session()
    session.map_next()
    session.map_next()
    session.map_back()
    assert session.client.requested_pages == ["", "page2", "page1"]
    assert out.getvalue() == "area-a\narea-b\narea-c\narea-a\n"


def test_map_back_on_first_page():
    session, out = make_session()
    session.map_back()
    assert out.getvalue() == "you're on the first page\n"
    assert session.client.requested_pages == []


def test_explore_sets_location_and_lists_pokemon():
    session, out = make_session()
    session.explore("pastoria-city-area")
    assert session.current_location == "pastoria-city-area"
    assert out.getvalue() == (
        "Exploring pastoria-city-area...\nFound Pokemon:\n - tentacool\n - pikachu\n"
    )


def test_explore_failure_keeps_location():
    session, _ = make_session()
    with pytest.raises(ApiError):
        session.explore("nowhere")
    assert session.current_location == "canalave-city-area"


def test_catch_success_adds_to_pokedex():
    session, out = make_session(roll=99)
    session.catch("pikachu")
    assert "pikachu" in session.pokedex
    assert out.getvalue() == "Throwing a Pokeball at pikachu...\npikachu was caught!\n"


def test_catch_escape_when_roll_equals_chance():
    session, out = make_session(roll=60)
    session.catch("pikachu")
    assert session.pokedex == {}
    assert out.getvalue().endswith("pikachu escaped!\n")


def test_catch_pokemon_not_in_area():
    session, _ = make_session()
    with pytest.raises(CommandError, match="pokemon not in area"):
        session.catch("mewtwo")


def test_inspect_caught_pokemon():
    session, out = make_session(roll=99)
    session.catch("pikachu")
    out.truncate(0)
    out.seek(0)
    session.inspect("pikachu")
    assert out.getvalue() == (
        "Name: pikachu\nHeight: 4\nWeight: 60\nStats:\n"
        "    -hp: 35\n    -attack: 55\nTypes:\n    - electric\n"
    )


def test_inspect_uncaught_pokemon():
    session, _ = make_session()
    with pytest.raises(CommandError, match="pikachu is not caught yet!"):
        session.inspect("pikachu")


def test_show_pokedex_empty_and_filled():
    session, out = make_session(roll=99)
    session.show_pokedex()
    assert out.getvalue() == "Your pokedex is empty\n"
    session.catch("pikachu")
    out.truncate(0)
    out.seek(0)
    session.show_pokedex()
    assert out.getvalue() == "Your Pokedex:\n - pikachu\n"


@pytest.mark.parametrize(
    "words, message",
    [
        (["explore"], "Missing required parameter (area)"),
        (["catch"], "Missing required parameter (pokemon)"),
        (["inspect"], "Missing required parameter (pokemon)"),
        (["fly"], "Unknown command"),
    ],
)
def test_execute_errors(words, message):
    session, _ = make_session()
    with pytest.raises(CommandError) as info:
        session.execute(words)
    assert str(info.value) == message


def test_exit_raises_system_exit():
    session, out = make_session()
    with pytest.raises(SystemExit) as info:
        session.execute(["exit"])
    assert info.value.code == 0
    assert out.getvalue() == "Closing the Pokedex... Goodbye!\n"


def test_run_prints_errors_and_continues():
    session, out = make_session(roll=99)
    run(session, ["", "fly away\n", "explore nowhere\n", "CATCH Pikachu\n"])
    text = out.getvalue()
    assert text.count("Pokedex > ") == 5
    assert "Unknown command\n" in text
    assert "Request failed with status: 404 Not Found\n" in text
    assert "pikachu was caught!\n" in text
    assert list(session.pokedex) == ["pikachu"]


def test_run_stops_on_exit():
    session, out = make_session()
    with pytest.raises(SystemExit):
        run(session, ["exit\n", "pokedex\n"])
    assert "Your pokedex is empty" not in out.getvalue()