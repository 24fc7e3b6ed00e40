"""Interactive command loop for exploring areas and catching pokemon."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TextIO

from pokedexcli.api import ApiError, PokeApiClient, Pokemon
from pokedexcli.cache import Cache

DEFAULT_LOCATION = "canalave-city-area"
PROMPT = "Pokedex > "
CACHE_INTERVAL = 5.0


class CommandError(Exception):
    """Raised when a command cannot be carried out."""


@dataclass(frozen=True)
class Command:
    """A named command of the interactive loop."""

    name: str
    description: str
    callback: Callable[[list[str]], None]


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it into words on whitespace."""
    return text.strip().lower().split()


def chance_by_base_experience(base_experience: int) -> int:
    """Return the escape threshold for a pokemon with the given base experience."""
    if base_experience < 100:
        return 80
    if base_experience < 200:
        return 60
    return 40


def _require(words: list[str], what: str) -> str:
    if len(words) < 2:
        raise CommandError(f"Missing required parameter ({what})")
    return words[1]


class Session:
    """State of one interactive session: map paging, location and caught pokemon."""

    def __init__(
        self,
        client: PokeApiClient,
        out: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
        start_location: str = DEFAULT_LOCATION,
    ) -> None:
        self.client = client
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.current_location = start_location
        self.pokedex: dict[str, Pokemon] = {}
        self.next_url = ""
        self.previous_url = ""
        self.commands: dict[str, Command] = {
            "exit": Command("exit", "Exit the Pokedex", lambda words: self.exit()),
            "help": Command("help", "Displays a help message", lambda words: self.help()),
            "map": Command(
                "map",
                "Displays the names of the location areas",
                lambda words: self.map_next(),
            ),
            "mapb": Command(
                "mapb",
                "Displays the names of the location areas (previous)",
                lambda words: self.map_back(),
            ),
            "explore": Command(
                "explore <area>",
                "Explore the area and list the Pokemons",
                lambda words: self.explore(_require(words, "area")),
            ),
            "catch": Command(
                "catch <pokemon>",
                "Throw a pokeball and tries to catch a pokemon",
                lambda words: self.catch(_require(words, "pokemon")),
            ),
            "inspect": Command(
                "inspect <pokemon>",
                "Shows the name, height, weight, stats and type(s) of the Pokemon",
                lambda words: self.inspect(_require(words, "pokemon")),
            ),
            "pokedex": Command(
                "pokedex",
                "Shows the list of pokemons you already got",
                lambda words: self.show_pokedex(),
            ),
        }

    def _print(self, *parts: object) -> None:
        print(*parts, file=self.out)

    def execute(self, words: list[str]) -> None:
        """Run the command named by the first word, passing all words to it."""
        if not words:
            return
        command = self.commands.get(words[0])
        if command is None:
            raise CommandError("Unknown command")
        command.callback(words)

    def help(self) -> None:
        """Print the list of commands."""
        self._print("Welcome to the Pokedex!")
        self._print("Usage:")
        self._print()
        for command in self.commands.values():
            self._print(f"{command.name}: {command.description}")

    def _show_page(self, url: str) -> None:
        page = self.client.list_location_areas(url)
        self.next_url = page.next
        self.previous_url = page.previous
        for area in page.results:
            self._print(area.name)

    def map_next(self) -> None:
        """Print the next page of location areas."""
        self._show_page(self.next_url)

    def map_back(self) -> None:
        """Print the previous page of location areas."""
        if not self.previous_url:
            self._print("you're on the first page")
            return
        self._show_page(self.previous_url)

    def explore(self, area: str) -> None:
        """Move to ``area`` and list the pokemon found there."""
        self._print(f"Exploring {area}...")
        encounters = self.client.pokemon_in_area(area)
        self.current_location = area
        self._print("Found Pokemon:")
        for encounter in encounters:
            self._print(" -", encounter.pokemon.name)

    def catch(self, pokemon_name: str) -> None:
        """Try to catch a pokemon that lives in the current area."""
        encounters = self.client.pokemon_encounters(pokemon_name)
        if not any(e.location_area.name == self.current_location for e in encounters):
            raise CommandError("pokemon not in area")

        self._print(f"Throwing a Pokeball at {pokemon_name}...")
        pokemon = self.client.get_pokemon(pokemon_name)

        roll = self.rng.randrange(100)
        if roll > chance_by_base_experience(pokemon.base_experience):
            self.pokedex[pokemon_name] = pokemon
            self._print(f"{pokemon_name} was caught!")
        else:
            self._print(f"{pokemon_name} escaped!")

    def inspect(self, pokemon_name: str) -> None:
        """Print the details of a caught pokemon."""
        pokemon = self.pokedex.get(pokemon_name)
        if pokemon is None:
            raise CommandError(f"{pokemon_name} is not caught yet!")
        self._print(f"Name: {pokemon.name}")
        self._print(f"Height: {pokemon.height}")
        self._print(f"Weight: {pokemon.weight}")
        self._print("Stats:")
        for stat in pokemon.stats:
            self._print(f"    -{stat.stat.name}: {stat.base_stat}")
        self._print("Types:")
        for slot in pokemon.types:
            self._print(f"    - {slot.type.name}")

    def show_pokedex(self) -> None:
        """Print the names of the caught pokemon."""
        if not self.pokedex:
            self._print("Your pokedex is empty")
            return
        self._print("Your Pokedex:")
        for name in self.pokedex:
            self._print(f" - {name}")

    def exit(self) -> None:
        """Say goodbye and end the program."""
        self._print("Closing the Pokedex... Goodbye!")
        raise SystemExit(0)


def run(session: Session, lines: Iterable[str]) -> None:
    """Prompt for and execute each line until the input runs out."""
    out = session.out
    out.write(PROMPT)
    out.flush()
    for line in lines:
        words = clean_input(line)
        if words:
            try:
                session.execute(words)
            except (CommandError, ApiError) as err:
                print(err, file=out)
        out.write(PROMPT)
        out.flush()


def main(argv: Optional[list[str]] = None) -> int:
    """Start the interactive Pokedex on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="pokedexcli", description="Explore areas and catch pokemon."
    )
    parser.parse_args(argv)
    with Cache(CACHE_INTERVAL) as cache:
        session = Session(PokeApiClient(cache=cache))
        try:
            run(session, sys.stdin)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 0
    return 0


if __name__ == "__main__":
    sys.exit(main())