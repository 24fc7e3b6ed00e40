# pokedexcli

An interactive Pokedex for the terminal. It pages through location areas,
explores them for Pokemon, and lets you throw Pokeballs to fill your own
Pokedex. All data comes from the public PokeAPI over HTTP. Raw responses are
kept in memory for five seconds, so repeating a request within that time does
not go back to the network.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Start the prompt:

```
pokedexcli
```

You get a `Pokedex > ` prompt. Each line is trimmed, lower-cased and split on
whitespace; the first word names the command and empty lines are ignored. The
session ends on `exit` or at the end of input.

| Command             | What it does                                                       |
|---------------------|--------------------------------------------------------------------|
| `exit`              | Prints a goodbye and closes the Pokedex                            |
| `help`              | Lists the commands with their descriptions                         |
| `map`               | Prints the names of the next page of location areas                |
| `mapb`              | Prints the names of the previous page of location areas            |
| `explore <area>`    | Lists the Pokemon found in the area and makes it your location     |
| `catch <pokemon>`   | Throws a Pokeball at a Pokemon that appears in your current area   |
| `inspect <pokemon>` | Shows name, height, weight, stats and types of a caught Pokemon    |
| `pokedex`           | Lists the Pokemon you have caught                                  |

Notes on behaviour:

- The first `map` shows the first page; each further `map` moves on one page.
  `mapb` before there is a previous page prints `you're on the first page`.
- You start in `canalave-city-area`. `catch` only works for a Pokemon that
  appears in your current area; otherwise it prints `pokemon not in area`.
- A catch rolls a number from 0 to 99 and succeeds only when the roll is above
  a threshold set by the Pokemon's base experience: 80 below 100, 60 below
  200, and 40 otherwise.
- A missing argument prints e.g. `Missing required parameter (area)`, an
  unknown word prints `Unknown command`, and a failed request prints its
  error; the prompt then continues.

Output has this shape:

```
Pokedex > explore <area>
Exploring <area>...
Found Pokemon:
 - <pokemon>
Pokedex > catch <pokemon>
Throwing a Pokeball at <pokemon>...
<pokemon> was caught!
Pokedex > inspect <pokemon>
Name: <pokemon>
Height: <height>
Weight: <weight>
Stats:
    -<stat>: <base stat>
Types:
    - <type>
Pokedex > exit
Closing the Pokedex... Goodbye!
```

## Using it from Python

- `pokedexcli.cache.Cache(interval)` is a thread-safe in-memory map of keys to
  bytes. `get` returns `None` for missing or expired entries; a background
  thread drops expired entries until `close()` is called. It is also a context
  manager.
- `pokedexcli.api.PokeApiClient(base_url, cache, fetch)` fetches and decodes
  responses into dataclasses such as `Pokemon`, `LocationArea` and
  `ListLocationAreas`. Its methods are `list_location_areas(url)`,
  `pokemon_in_area(area)`, `pokemon_encounters(pokemon_name)` and
  `get_pokemon(pokemon_name)`. Failed requests and undecodable responses raise
  `ApiError`, except in `pokemon_encounters`, which returns an empty list.
  `fetch` can be any callable that takes a URL and returns the body as bytes.
- `pokedexcli.repl.Session(client, out, rng, start_location)` holds the state of
  one session and runs commands through `execute(words)`, raising
  `CommandError` for unknown commands and bad input. `run(session, lines)`
  drives a session from any iterable of lines.

## Limitations

The Pokedex lives only in memory: caught Pokemon are lost when the program
ends, and nothing is written to disk.