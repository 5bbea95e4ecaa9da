"""Song catalogue indexed by id, genre, artist and tempo, plus playlists."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from spotifind.csvline import read_csv, split_string
from spotifind.hashmap import HashMap

TEMPO_SLOW = "Lentas"
TEMPO_MODERATE = "Moderadas"
TEMPO_FAST = "Rapidas"
TEMPO_CATEGORIES = (TEMPO_SLOW, TEMPO_MODERATE, TEMPO_FAST)

DATASET_FILE = "song_dataset.csv"
EXPECTED_SONGS = 114000
PROGRESS_STEP = 1000

NOT_LOADED_MESSAGE = "¡El programa no puede funcionar si no se han cargado canciones!"

_ID_FIELD = 0
_ARTISTS_FIELD = 2
_ALBUM_FIELD = 3
_TRACK_FIELD = 4
_TEMPO_FIELD = 18
_GENRE_FIELD = 20

_ID_LIMIT = 99
_NAME_LIMIT = 199
_GENRE_LIMIT = 99

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)

Progress = Callable[[int, int], None]


class NotLoadedError(RuntimeError):
    """Raised when the catalogue is queried before any song was loaded."""

    def __init__(self, message: str = NOT_LOADED_MESSAGE) -> None:
        super().__init__(message)


@dataclass
class Song:
    """One track of the dataset."""

    id: str
    artists: List[str] = field(default_factory=list)
    album_name: str = ""
    track_name: str = ""
    tempo: float = 0.0
    track_genre: str = ""


def tempo_category(tempo: float) -> str:
    """Name the speed class of a tempo: below 80, up to 120, or above."""
    if tempo < 80:
        return TEMPO_SLOW
    if tempo <= 120:
        return TEMPO_MODERATE
    return TEMPO_FAST


def _leading_float(text: str) -> float:
    """Read the longest numeric prefix of ``text``, or 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def song_from_fields(fields: Sequence[str]) -> Song:
    """Build a song from one parsed dataset row."""
    if len(fields) <= _GENRE_FIELD:
        raise ValueError(
            f"row has {len(fields)} fields, at least {_GENRE_FIELD + 1} are needed"
        )
    artists_text = fields[_ARTISTS_FIELD]
    artists = split_string(artists_text, ";") if artists_text else []
    return Song(
        id=fields[_ID_FIELD][:_ID_LIMIT],
        artists=artists,
        album_name=fields[_ALBUM_FIELD][:_NAME_LIMIT],
        track_name=fields[_TRACK_FIELD][:_NAME_LIMIT],
        tempo=_leading_float(fields[_TEMPO_FIELD]),
        track_genre=fields[_GENRE_FIELD][:_GENRE_LIMIT],
    )


def _append(index: HashMap, key: str, song: Song) -> None:
    pair = index.search(key)
    if pair is None:
        index.insert(key, [song])
    else:
        pair.value.append(song)


def _lookup(index: HashMap, key: str, what: str) -> List[Song]:
    pair = index.search(key)
    if pair is None:
        raise KeyError(f"{what} not found: {key}")
    return pair.value


class Catalog:
    """Songs indexed case-insensitively by id, genre, artist and tempo class."""

    def __init__(self) -> None:
        self._by_id = HashMap(200000)
        self._by_genre = HashMap(1000)
        self._by_artist = HashMap(50000)
        self._by_tempo = HashMap(10)

    def add(self, song: Song) -> None:
        """Index ``song``; an id already present keeps its first song."""
        self._by_id.insert(song.id, song)
        _append(self._by_genre, song.track_genre, song)
        for artist in song.artists:
            _append(self._by_artist, artist, song)
        _append(self._by_tempo, tempo_category(song.tempo), song)

    def load(self, stream: TextIO, progress: Optional[Progress] = None) -> int:
        """Add every row of a dataset stream after its header line.

        ``progress`` is called with the count and the expected total every
        thousand songs. Returns the number of rows read.
        """
        rows: Iterator[List[str]] = read_csv(stream, ",")
        if next(rows, None) is None:
            return 0
        count = 0
        for fields in rows:
            self.add(song_from_fields(fields))
            count += 1
            if progress is not None and (
                count % PROGRESS_STEP == 0 or count == EXPECTED_SONGS
            ):
                progress(count, EXPECTED_SONGS)
        return count

    def load_file(
        self, path: str = DATASET_FILE, progress: Optional[Progress] = None
    ) -> int:
        """Open ``path`` and load it; OSError propagates if it cannot be read."""
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as stream:
            return self.load(stream, progress)

    def require_loaded(self) -> None:
        """Raise NotLoadedError if no song has been added yet."""
        if self._by_id.first() is None:
            raise NotLoadedError()

    def song(self, song_id: str) -> Song:
        """Return the song with ``song_id``; KeyError if unknown."""
        self.require_loaded()
        pair = self._by_id.search(song_id)
        if pair is None:
            raise KeyError(f"song not found: {song_id}")
        return pair.value

    def by_genre(self, genre: str) -> List[Song]:
        """Songs of ``genre`` in load order; KeyError if unknown."""
        self.require_loaded()
        return _lookup(self._by_genre, genre, "genre")

    def by_artist(self, artist: str) -> List[Song]:
        """Songs credited to ``artist`` in load order; KeyError if unknown."""
        self.require_loaded()
        return _lookup(self._by_artist, artist, "artist")

    def by_tempo(self, category: str) -> List[Song]:
        """Songs of a tempo class in load order; KeyError if it has none."""
        self.require_loaded()
        return _lookup(self._by_tempo, category, "tempo category")


class Playlists:
    """Named song lists; names compare case-insensitively."""

    def __init__(self) -> None:
        self._lists = HashMap(100)

    def create(self, name: str) -> None:
        """Create an empty playlist; ValueError if the name is taken."""
        if self._lists.search(name) is not None:
            raise ValueError(f"a playlist named {name!r} already exists")
        self._lists.insert(name, [])

    def add_song(self, name: str, song: Song) -> None:
        """Append ``song`` to playlist ``name``; KeyError if it does not exist."""
        _lookup(self._lists, name, "playlist").append(song)

    def songs(self, name: str) -> List[Song]:
        """The songs of playlist ``name``; KeyError if it does not exist."""
        return _lookup(self._lists, name, "playlist")

    def __contains__(self, name: object) -> bool:
        return name in self._lists

    def __iter__(self) -> Iterator[Tuple[str, List[Song]]]:
        """Yield ``(name, songs)`` for each playlist."""
        for pair in self._lists:
            yield pair.key, pair.value

    def __len__(self) -> int:
        return len(self._lists)


__all__: Iterable[str] = (
    "Song",
    "NotLoadedError",
    "Catalog",
    "Playlists",
    "tempo_category",
    "song_from_fields",
)