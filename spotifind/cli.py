"""Interactive console menu for browsing the song catalogue."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from spotifind.catalog import (
    DATASET_FILE,
    TEMPO_FAST,
    TEMPO_MODERATE,
    TEMPO_SLOW,
    Catalog,
    NotLoadedError,
    Playlists,
    Song,
)
from spotifind.csvline import CONTINUE_PROMPT, clear_screen

BAR_WIDTH = 40
UNKNOWN_ARTIST = "Desconocido"
EMPTY_LIST_MESSAGE = "La lista de reproducción no contiene canciones."
INVALID_OPTION = "Opción no válida. Por favor, intente de nuevo."

GENRES: Tuple[str, ...] = (
    "acoustic", "afrobeat", "alt-rock", "alternative", "ambient",
    "anime", "black-metal", "bluegrass", "blues", "brazil",
    "breakbeat", "british", "cantopop", "chicago-house", "children",
    "chill", "classical", "club", "comedy", "country",
    "dance", "dancehall", "death-metal", "deep-house", "detroit-techno",
    "disco", "disney", "drum-and-bass", "dub", "dubstep",
    "edm", "electro", "electronic", "emo", "folk",
    "forro", "french", "funk", "garage", "german",
    "gospel", "goth", "grindcore", "groove", "grunge",
    "guitar", "happy", "hard-rock", "hardcore", "hardstyle",
    "heavy-metal", "hip-hop", "honky-tonk", "house", "idm",
    "indian", "indie", "indie-pop", "industrial", "iranian",
    "j-dance", "j-idol", "j-pop", "j-rock", "jazz",
    "k-pop", "kids", "latin", "latino", "malay",
    "mandopop", "metal", "metalcore", "minimal-techno", "mpb",
    "new-age", "opera", "pagode", "party", "piano",
    "pop", "pop-film", "power-pop", "progressive-house", "psych-rock",
    "punk", "punk-rock", "r-n-b", "reggae", "reggaeton",
    "rock", "rock-n-roll", "rockabilly", "romance", "sad",
    "salsa", "samba", "sertanejo", "show-tunes", "singer-songwriter",
    "ska", "sleep", "songwriter", "soul", "spanish",
    "study", "swedish", "synth-pop", "tango", "techno",
    "trance", "trip-hop", "turkish", "world-music",
)

MAIN_MENU = "\n".join((
    "╔════════════════════════════════════════════╗",
    "║              Spotifind - Menú              ║",
    "╠════════════════════════════════════════════╣",
    "║  1) Cargar canciones                       ║",
    "║  2) Buscar por género                      ║",
    "║  3) Buscar por artista                     ║",
    "║  4) Buscar por tempo                       ║",
    "║  5) Crear lista de reproducción            ║",
    "║  6) Agregar canción a la lista             ║",
    "║  7) Mostrar canciones de la lista          ║",
    "║  8) Salir                                  ║",
    "╚════════════════════════════════════════════╝",
)) + "\n"

GENRE_HEADER = "\n".join((
    "╔═══════════════════════════════════════════════════════════════════════════╗",
    "║                Spotifind - Búsqueda por género musical                    ║",
    "╚═══════════════════════════════════════════════════════════════════════════╝",
)) + "\n"

ARTIST_HEADER = "\n".join((
    "╔═══════════════════════════════════════════════════════════════════════════╗",
    "║                   Spotifind - Búsqueda por artista                        ║",
    "╚═══════════════════════════════════════════════════════════════════════════╝",
)) + "\n"

TEMPO_MENU = "\n".join((
    "╔════════════════════════════════════════════╗",
    "║         Spotifind - Búsqueda por tempo     ║",
    "╠════════════════════════════════════════════╣",
    "║  1) Canciones lentas                       ║",
    "║  2) Canciones moderadas                    ║",
    "║  3) Canciones rápidas                      ║",
    "╚════════════════════════════════════════════╝",
)) + "\n"

AMOUNT_MENU = "\n".join((
    "╔════════════════════════════════════════════╗",
    "║      Spotifind - Seleccionar cantidad      ║",
    "╠════════════════════════════════════════════╣",
    "║  1) Todas las canciones                    ║",
    "║  2) Cantidad personalizada                 ║",
    "╚════════════════════════════════════════════╝",
)) + "\n"

_TEMPO_OPTIONS = {"1": TEMPO_SLOW, "2": TEMPO_MODERATE, "3": TEMPO_FAST}
_INTEGER = re.compile(r"[+-]?\d+")


def format_song(song: Song) -> str:
    """One display line describing ``song``."""
    artists = ", ".join(song.artists) if song.artists else UNKNOWN_ARTIST
    return (
        f"ID: {song.id} | Artista(s): {artists} | Álbum: {song.album_name}"
        f" | Canción: {song.track_name} | Tempo: {song.tempo:.0f}"
        f" | Género: {song.track_genre}"
    )


def render_songs(songs: Sequence[Song], limit: Optional[int] = None) -> str:
    """List ``songs``, at most ``limit`` of them; None or negative shows all."""
    if not songs:
        return EMPTY_LIST_MESSAGE + "\n"
    shown = songs if limit is None or limit < 0 else songs[:limit]
    lines = ["", "Lista de canciones:"]
    lines.extend(format_song(song) for song in shown)
    return "\n".join(lines) + "\n"


def progress_bar(current: int, total: int) -> str:
    """A carriage-return-led loading bar for ``current`` of ``total``."""
    progress = current / total
    filled = int(progress * BAR_WIDTH)
    filled = max(0, min(BAR_WIDTH, filled))
    bar = "█" * filled + "░" * (BAR_WIDTH - filled)
    percent = int(progress * 100)
    return f"\rCargando canciones: [{bar}] {percent:3d}% ({current} / {total})"


def render_genres(genres: Sequence[str] = GENRES) -> str:
    """A boxed table of genre names, three to a row."""
    parts: List[str] = [
        "╔═════════════════════════════════════════════════════════════╗\n",
        "║              Spotifind - Géneros disponibles                ║\n",
        "╠═════════════════════════════════════════════════════════════╣\n",
    ]
    for position, genre in enumerate(genres):
        if position % 3 == 0:
            parts.append("║")
        parts.append(f" {genre:<19}")
        if (position + 1) % 3 == 0:
            parts.append(" ║\n")
    remaining = len(genres) % 3
    if remaining:
        parts.append(f" {' ':<20}" * (3 - remaining))
        parts.append(" ║\n")
    parts.append("╚═════════════════════════════════════════════════════════════╝\n")
    return "".join(parts)


def render_playlists(playlists: Iterable[Tuple[str, Sequence[Song]]]) -> str:
    """A numbered table of playlist names and their song counts."""
    parts = [
        "╔═══════════════════════════════════════════════════╗\n",
        "║           Listas de reproducción creadas          ║\n",
        "╠═════╦═════════════════════════════╦═══════════════╣\n",
        "║  N° ║ Nombre                      ║ Canciones     ║\n",
        "╠═════╬═════════════════════════════╬═══════════════╣\n",
    ]
    for number, (name, songs) in enumerate(playlists, start=1):
        parts.append(f"║ {number:2d}  ║ {name:<28}║     {len(songs):4d}      ║\n")
    parts.append("╚═════╩═════════════════════════════╩═══════════════╝\n")
    return "".join(parts)


class _Input:
    """Character reader with pushback, offering scanf-like token reads."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: List[str] = []

    def getc(self) -> str:
        if self._pending:
            return self._pending.pop()
        return self._stream.read(1)

    def _ungetc(self, char: str) -> None:
        self._pending.append(char)

    def _first(self) -> str:
        char = self.getc()
        while char and char.isspace():
            char = self.getc()
        if not char:
            raise EOFError
        return char

    def char(self) -> str:
        return self._first()

    def _until(self, stop) -> str:
        chars = [self._first()]
        while True:
            char = self.getc()
            if not char:
                break
            if stop(char):
                self._ungetc(char)
                break
            chars.append(char)
        return "".join(chars)

    def word(self) -> str:
        return self._until(str.isspace)

    def line(self) -> str:
        return self._until(lambda char: char == "\n")

    def integer(self) -> Optional[int]:
        match = _INTEGER.match(self.word())
        return int(match.group()) if match else None


class Session:
    """One run of the menu, reading choices from ``stdin``."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        dataset: str = DATASET_FILE,
    ) -> None:
        self._in = _Input(stdin if stdin is not None else sys.stdin)
        self._out = stdout if stdout is not None else sys.stdout
        self.dataset = dataset
        self.catalog = Catalog()
        self.playlists = Playlists()
        self.loaded = False
        isatty = getattr(self._out, "isatty", None)
        self._clear = bool(isatty and isatty())

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _say(self, text: str) -> None:
        self._write(text + "\n")

    def run(self) -> None:
        """Show the menu and serve options until 8 or end of input."""
        try:
            while True:
                if self._clear:
                    clear_screen()
                self._write(MAIN_MENU)
                self._write("Ingrese su opción: ")
                option = self._in.char()
                self._write("\n")
                if option == "8":
                    self._say("Saliendo del programa...")
                    return
                self._dispatch(option)
                self._wait()
        except EOFError:
            return

    def _dispatch(self, option: str) -> None:
        actions = {
            "1": self._load,
            "2": self._search_genre,
            "3": self._search_artist,
            "4": self._search_tempo,
            "5": self._create_playlist,
            "6": self._add_to_playlist,
            "7": self._show_playlist,
        }
        action = actions.get(option)
        if action is None:
            self._say(INVALID_OPTION)
            return
        try:
            action()
        except NotLoadedError as error:
            self._write(f"{error}\n\n")

    def _wait(self) -> None:
        self._say(CONTINUE_PROMPT)
        self._in.getc()
        self._in.getc()

    def _load(self) -> None:
        if self.loaded:
            self._write("¡Las canciones ya se cargaron!\n\n")
            return
        self.loaded = True
        try:
            self.catalog.load_file(
                self.dataset, lambda current, total: self._write(progress_bar(current, total))
            )
        except OSError as error:
            sys.stderr.write(f"Error al abrir el archivo: {error.strerror or error}\n")
            return
        except ValueError as error:
            sys.stderr.write(f"Error al leer el archivo: {error}\n")
            return
        self._write("\nCanciones cargadas exitosamente!\n\n")

    def _search_genre(self) -> None:
        self.catalog.require_loaded()
        self._write(GENRE_HEADER)
        self._write("Ingrese el género de la canción: ")
        while True:
            genre = self._in.word()
            try:
                songs = self.catalog.by_genre(genre)
                break
            except KeyError:
                self._write(
                    "\nEl género ingresado no es válido. "
                    "¡Por favor ingrese uno de los siguientes géneros!\n\n"
                )
                self._write(render_genres(GENRES))
                self._write("\n\n")
                self._write("Ingrese el género de la canción: ")
        self._write(render_songs(songs))

    def _search_artist(self) -> None:
        self.catalog.require_loaded()
        self._write(ARTIST_HEADER)
        self._write("Ingrese el artista que desea buscar: ")
        while True:
            artist = self._in.line()
            try:
                songs = self.catalog.by_artist(artist)
                break
            except KeyError:
                self._write("\nEl artista ingresado no se encontró.\n\n")
                self._write("Ingrese el artista que desea buscar: ")
        self._write(render_songs(songs))

    def _search_tempo(self) -> None:
        self.catalog.require_loaded()
        self._write(TEMPO_MENU)
        self._write("Ingrese la opción del tempo que desea buscar: ")
        option = self._in.char()
        while option not in _TEMPO_OPTIONS:
            self._say(INVALID_OPTION)
            self._write("Ingrese el tempo que desea buscar: ")
            option = self._in.char()
        try:
            songs = self.catalog.by_tempo(_TEMPO_OPTIONS[option])
        except KeyError:
            songs = []

        self._write(AMOUNT_MENU)
        self._write("Ingrese una opción: ")
        option = self._in.char()
        while option not in ("1", "2"):
            self._say(INVALID_OPTION)
            self._write("Ingrese la opción que desea: ")
            option = self._in.char()
        limit: Optional[int] = None
        if option == "2":
            self._say("¿Cuántas canciones desea mostrar?: ")
            limit = self._in.integer()
            while limit is None or limit < 0:
                self._say("No puedes ingresar un número negativo. Intente nuevamente.")
                self._write("\n¿Cuántas canciones desea mostrar?: ")
                limit = self._in.integer()
        self._write(render_songs(songs, limit))

    def _create_playlist(self) -> None:
        self._write("Ingrese el nombre para su lista de reproducción: ")
        name = self._in.line()
        try:
            self.playlists.create(name)
        except ValueError:
            self._write(
                "\nYa existe una lista de reproducción con ese nombre, "
                "por favor intenta con otro.\n"
            )
            return
        self._write(f"\nLista de reproducción ({name}) creada con éxito.\n")

    def _list_playlists(self) -> bool:
        if not len(self.playlists):
            self._say("No se encontraron listas de reproducción para mostrar.")
            self._write("Por favor, crea una lista primero.\n\n")
            return False
        self._write(render_playlists(self.playlists))
        return True

    def _ask_playlist(self, prompt: str, retry: str, again: str) -> str:
        self._write(prompt)
        name = self._in.line()
        while name not in self.playlists:
            self._write(retry)
            self._write(again)
            name = self._in.line()
        return name

    def _add_to_playlist(self) -> None:
        self.catalog.require_loaded()
        if not self._list_playlists():
            return
        name = self._ask_playlist(
            "Ingrese el nombre de la lista que desea agregar una cancion:",
            "El nombre ingresado de la lista no existe\n",
            "Por favor ingresa uno valido:",
        )
        self._write("Ingrese el ID de la cancion que desea ingresar:")
        while True:
            song_id = self._in.line()
            try:
                song = self.catalog.song(song_id)
                break
            except KeyError:
                self._write("El ID ingresado no ha encontrado\n")
                self._write("Ingrese un ID válido:")
        self.playlists.add_song(name, song)
        self._write(f'\nCanción "{song.track_name}" exitosamente a la lista "{name}".\n')

    def _show_playlist(self) -> None:
        if not self._list_playlists():
            return
        name = self._ask_playlist(
            "\nIngrese el nombre de la lista que desea ver: ",
            "El nombre ingresado no corresponde a ninguna lista.\n",
            "Por favor, ingrese un nombre válido: ",
        )
        self._write(render_songs(self.playlists.songs(name)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the interactive menu."""
    parser = argparse.ArgumentParser(prog="spotifind", description="Browse a song dataset.")
    parser.add_argument("dataset", nargs="?", default=DATASET_FILE, help="CSV file of songs")
    args = parser.parse_args(argv)
    Session(sys.stdin, sys.stdout, args.dataset).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())