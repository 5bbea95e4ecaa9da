import io
import sys

import pytest

from spotifind.catalog import NOT_LOADED_MESSAGE, Song
from spotifind.cli import (
    EMPTY_LIST_MESSAGE,
    GENRES,
    Session,
    format_song,
    main,
    progress_bar,
    render_genres,
    render_playlists,
    render_songs,
)


def _row(song_id, artists, album, track, tempo, genre):
    fields = [song_id, "0", artists, album, track] + ["0"] * 13 + [tempo, "0", genre]
    return ",".join(fields)


@pytest.fixture
def dataset(tmp_path):
    header = ",".join(f"col{i}" for i in range(21))
    rows = [
        header,
        _row("id1", "Alice;Bob", "AlbumOne", "TrackOne", "70.2", "pop"),
        _row("id2", "Alice", "AlbumTwo", "TrackTwo", "100.0", "rock"),
        _row("id3", "Carol", "AlbumThree", "TrackThree", "150.0", "pop"),
    ]
    path = tmp_path / "songs.csv"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


def _run(script, dataset):
    out = io.StringIO()
    session = Session(io.StringIO(script), out, str(dataset))
    session.run()
    return out.getvalue(), session


def _song(artists=("A", "B")):
    return Song("abc", list(artists), "Alb", "Tr", 99.0, "pop")


def test_format_song_lists_artists():
    line = format_song(_song())
    assert line == "ID: abc | Artista(s): A, B | Álbum: Alb | Canción: Tr | Tempo: 99 | Género: pop"


def test_format_song_unknown_artist():
    assert "Artista(s): Desconocido |" in format_song(_song(artists=()))


def test_render_songs_empty():
    assert render_songs([]) == EMPTY_LIST_MESSAGE + "\n"


def test_render_songs_limit():
    songs = [_song(), Song("x2", [], "B", "T2", 1.0, "rock")]
    everything = render_songs(songs)
    limited = render_songs(songs, 1)
    assert everything.startswith("\nLista de canciones:\n")
    assert everything.count("ID: ") == 2
    assert limited.count("ID: ") == 1
    assert render_songs(songs, -1) == everything


def test_progress_bar_half_and_full():
    half = progress_bar(57000, 114000)
    assert half.startswith("\rCargando canciones: [")
    assert half.count("█") == half.count("░")
    assert half.endswith("(57000 / 114000)")
    full = progress_bar(114000, 114000)
    assert full.endswith("100% (114000 / 114000)")
    assert "░" not in full


def test_render_genres_rows():
    table = render_genres(GENRES)
    assert all(genre in table for genre in GENRES)
    lines = table.splitlines()
    assert len(lines) == len(GENRES) // 3 + 4
    assert all(line.endswith("║") for line in lines[3:-1])


def test_render_playlists_row():
    table = render_playlists([("Favoritas", [_song(), _song()])])
    assert "Favoritas" in table
    assert "║  1  ║ Favoritas" in table


def test_exit_option(dataset):
    output, _ = _run("8\n", dataset)
    assert "Saliendo del programa..." in output


def test_search_before_load(dataset):
    output, _ = _run("2\n\n\n8\n", dataset)
    assert NOT_LOADED_MESSAGE in output


def test_invalid_option(dataset):
    output, _ = _run("9\n\n\n8\n", dataset)
    assert "Opción no válida. Por favor, intente de nuevo." in output


def test_load_and_search_genre(dataset):
    output, session = _run("1\n\n2\nPOP\n\n\n8\n", dataset)
    assert "Canciones cargadas exitosamente!" in output
    assert "ID: id1" in output and "ID: id3" in output
    assert "ID: id2" not in output
    assert session.loaded


def test_invalid_genre_shows_table(dataset):
    output, _ = _run("1\n\n2\nnada\npop\n\n\n8\n", dataset)
    assert "El género ingresado no es válido." in output
    assert "world-music" in output
    assert "ID: id1" in output


def test_search_artist(dataset):
    output, _ = _run("1\n\n3\nNobody Here\nalice\n\n\n8\n", dataset)
    assert "El artista ingresado no se encontró." in output
    assert "ID: id1" in output and "ID: id2" in output
    assert "ID: id3" not in output


def test_search_tempo_custom_amount(dataset):
    output, _ = _run("1\n\n4\n5\n2\n2\n-1\n1\n\n\n8\n", dataset)
    assert "No puedes ingresar un número negativo." in output
    assert "ID: id2" in output
    assert "ID: id1" not in output


def test_load_twice(dataset):
    output, _ = _run("1\n\n1\n\n8\n", dataset)
    assert "¡Las canciones ya se cargaron!" in output


def test_missing_dataset(tmp_path, capsys):
    output, session = _run("1\n\n8\n", tmp_path / "missing.csv")
    assert "Error al abrir el archivo" in capsys.readouterr().err
    assert "Canciones cargadas exitosamente!" not in output
    assert session.loaded


def test_playlist_flow(dataset):
    script = "1\n\n5\nMix\n\n\n6\nOtra\nmix\nzzz\nid2\n\n\n7\nMix\n\n\n8\n"
    output, session = _run(script, dataset)
    assert "Lista de reproducción (Mix) creada con éxito." in output
    assert "El nombre ingresado de la lista no existe" in output
    assert "El ID ingresado no ha encontrado" in output
    assert 'Canción "TrackTwo" exitosamente a la lista "mix".' in output
    assert [song.id for song in session.playlists.songs("Mix")] == ["id2"]
    assert output.count("ID: id2") == 1


def test_duplicate_playlist(dataset):
    output, session = _run("5\nMix\n\n\n5\nMIX\n\n\n8\n", dataset)
    assert "Ya existe una lista de reproducción con ese nombre" in output
    assert len(session.playlists) == 1


def test_show_without_playlists(dataset):
    output, _ = _run("7\n\n8\n", dataset)
    assert "No se encontraron listas de reproducción para mostrar." in output


def test_end_of_input_stops(dataset):
    output, _ = _run("1\n", dataset)
    assert output.count("Spotifind - Menú") == 2


def test_main_reads_stdin(dataset, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n\n2\nrock\n\n\n8\n"))
    assert main([str(dataset)]) == 0
    captured = capsys.readouterr().out
    assert "ID: id2" in captured
    assert "Saliendo del programa..." in captured