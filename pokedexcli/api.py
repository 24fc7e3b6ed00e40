"""Typed access to the PokeAPI location-area and pokemon endpoints."""

import dataclasses
import json
import typing
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pokedexcli.cache import Cache

BASE_URL = "https://pokeapi.co/api/v2/"
CACHE_INTERVAL = 5.0


class ApiError(Exception):
    """Raised when a request fails or its response cannot be decoded."""


def _convert(tp: Any, value: Any) -> Any:
    """Coerce a decoded JSON value to ``tp``, using zero values for missing data."""
    if tp is Any:
        return value
    origin, args = typing.get_origin(tp), typing.get_args(tp)
    if origin is list:
        return [_convert(args[0], item) for item in value or []]
    if origin is dict:
        items = value.items() if isinstance(value, dict) else ()
        return {key: _convert(args[1], item) for key, item in items}
    if origin is typing.Union:
        return value if isinstance(value, str) else None
    if tp is str:
        return value if isinstance(value, str) else ""
    if tp is bool:
        return bool(value)
    if tp is int:
        return value if isinstance(value, int) and not isinstance(value, bool) else 0
    return tp.from_dict(value if isinstance(value, dict) else {})


class _Model:
    @classmethod
    def from_dict(cls, data: dict):
        """Build an instance from a decoded JSON object."""
        return cls(
            **{
                f.name: _convert(f.type, data.get(f.metadata.get("key", f.name)))
                for f in dataclasses.fields(cls)
            }
        )


def _res() -> Any:
    return field(default_factory=NamedAPIResource)


def _many() -> Any:
    return field(default_factory=list)


@dataclass
class NamedAPIResource(_Model):
    name: str = ""
    url: str = ""


@dataclass
class Name(_Model):
    language: NamedAPIResource = _res()
    name: str = ""


@dataclass
class EncounterVersionDetail(_Model):
    rate: int = 0
    version: NamedAPIResource = _res()


@dataclass
class EncounterMethodRate(_Model):
    encounter_method: NamedAPIResource = _res()
    version_details: list[EncounterVersionDetail] = _many()


@dataclass
class EncounterDetail(_Model):
    chance: int = 0
    condition_values: list[NamedAPIResource] = _many()
    max_level: int = 0
    method: NamedAPIResource = _res()
    min_level: int = 0


@dataclass
class PokemonEncounterVersion(_Model):
    max_chance: int = 0
    encounter_details: list[EncounterDetail] = _many()
    version: NamedAPIResource = _res()


@dataclass
class PokemonEncounter(_Model):
    pokemon: NamedAPIResource = _res()
    version_details: list[PokemonEncounterVersion] = _many()


@dataclass
class LocationArea(_Model):
    encounter_method_rates: list[EncounterMethodRate] = _many()
    game_index: int = 0
    id: int = 0
    location: NamedAPIResource = _res()
    name: str = ""
    names: list[Name] = _many()
    pokemon_encounters: list[PokemonEncounter] = _many()


@dataclass
class LocationAreaEncounter(_Model):
    location_area: LocationArea = field(default_factory=LocationArea)
    version_details: Any = None


@dataclass
class ListLocationAreas(_Model):
    count: int = 0
    next: str = ""
    previous: str = ""
    results: list[LocationArea] = _many()


@dataclass
class Ability(_Model):
    is_hidden: bool = False
    slot: int = 0
    ability: NamedAPIResource = _res()


@dataclass
class GameIndex(_Model):
    game_index: int = 0
    version: NamedAPIResource = _res()


@dataclass
class VersionDetail(_Model):
    rarity: int = 0
    version: NamedAPIResource = _res()


@dataclass
class HeldItem(_Model):
    item: NamedAPIResource = _res()
    version_details: list[VersionDetail] = _many()


@dataclass
class VersionGroupDetail(_Model):
    level_learned_at: int = 0
    version_group: NamedAPIResource = _res()
    move_learn_method: NamedAPIResource = _res()
    order: int = 0


@dataclass
class Move(_Model):
    move: NamedAPIResource = _res()
    version_group_details: list[VersionGroupDetail] = _many()


@dataclass
class Sprite(_Model):
    front_default: Optional[str] = None
    front_female: Optional[str] = None
    front_shiny: Optional[str] = None
    front_shiny_female: Optional[str] = None
    back_default: Optional[str] = None
    back_female: Optional[str] = None
    back_shiny: Optional[str] = None
    back_shiny_female: Optional[str] = None


@dataclass
class OtherSprites(_Model):
    dream_world: Sprite = field(default_factory=Sprite)
    home: Sprite = field(default_factory=Sprite)
    official_artwork: Sprite = field(
        default_factory=Sprite, metadata={"key": "official-artwork"}
    )
    showdown: Sprite = field(default_factory=Sprite)


@dataclass
class Sprites(Sprite):
    other: OtherSprites = field(default_factory=OtherSprites)
    versions: dict[str, dict[str, Sprite]] = field(default_factory=dict)


@dataclass
class Cries(_Model):
    latest: str = ""
    legacy: str = ""


@dataclass
class Stat(_Model):
    base_stat: int = 0
    effort: int = 0
    stat: NamedAPIResource = _res()


@dataclass
class TypeSlot(_Model):
    slot: int = 0
    type: NamedAPIResource = _res()


@dataclass
class PastType(_Model):
    generation: NamedAPIResource = _res()
    types: list[TypeSlot] = _many()


@dataclass
class PastAbility(_Model):
    generation: NamedAPIResource = _res()
    abilities: list[Ability] = _many()


@dataclass
class Pokemon(_Model):
    id: int = 0
    name: str = ""
    base_experience: int = 0
    height: int = 0
    is_default: bool = False
    order: int = 0
    weight: int = 0
    abilities: list[Ability] = _many()
    forms: list[NamedAPIResource] = _many()
    game_indices: list[GameIndex] = _many()
    held_items: list[HeldItem] = _many()
    location_area_encounters: str = ""
    moves: list[Move] = _many()
    species: NamedAPIResource = _res()
    sprites: Sprites = field(default_factory=Sprites)
    cries: Cries = field(default_factory=Cries)
    stats: list[Stat] = _many()
    types: list[TypeSlot] = _many()
    past_types: list[PastType] = _many()
    past_abilities: list[PastAbility] = _many()


def _http_get(url: str) -> bytes:
    """Fetch ``url`` and return the body, raising ApiError unless the status is 200."""
    try:
        with urllib.request.urlopen(url) as response:
            if response.status != 200:
                raise ApiError(
                    f"Request failed with status: {response.status} {response.reason}"
                )
            return response.read()
    except urllib.error.HTTPError as exc:
        raise ApiError(f"Request failed with status: {exc.code} {exc.reason}") from exc
    except urllib.error.URLError as exc:
        raise ApiError(f"Request failed: {exc.reason}") from exc


class PokeApiClient:
    """Client for the PokeAPI that caches raw responses by URL."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        cache: Optional[Cache] = None,
        fetch: Optional[Callable[[str], bytes]] = None,
    ) -> None:
        self.base_url = base_url
        self.cache = cache if cache is not None else Cache(CACHE_INTERVAL)
        self._fetch = fetch if fetch is not None else _http_get

    def list_location_areas(self, url: str = "") -> ListLocationAreas:
        """Return one page of location areas, the first page if ``url`` is empty."""
        target = url or self.base_url + "location-area/"
        return ListLocationAreas.from_dict(self._call(target))

    def pokemon_in_area(self, area: str) -> list[PokemonEncounter]:
        """Return the pokemon that can be encountered in ``area``."""
        data = self._call(self.base_url + "location-area/" + area)
        return LocationArea.from_dict(data).pokemon_encounters

    def pokemon_encounters(self, pokemon_name: str) -> list[LocationAreaEncounter]:
        """Return the areas where the pokemon appears; an empty list if the lookup fails."""
        try:
            data = self._call(self.base_url + "pokemon/" + pokemon_name + "/encounters")
        except ApiError:
            return []
        return [LocationAreaEncounter.from_dict(item) for item in data or []]

    def get_pokemon(self, pokemon_name: str) -> Pokemon:
        """Return the full record of a pokemon."""
        return Pokemon.from_dict(self._call(self.base_url + "pokemon/" + pokemon_name))

    def _call(self, url: str) -> Any:
        body = self.cache.get(url)
        if body is None:
            body = self._fetch(url)
            self.cache.add(url, body)
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ApiError(f"invalid response from {url}: {exc}") from exc