# spotifind

A console program for exploring a song dataset. It loads songs from a CSV
file and lets you browse them by genre, by artist and by tempo, and collect
them into named playlists. The menus and messages are in Spanish.

## Installation

```
pip install .
```

## Usage

```
spotifind [dataset]
```

`dataset` is the CSV file to load; it defaults to `song_dataset.csv` in the
current directory. The program reads its choices from standard input, and
clears the screen before each menu when its output is a terminal.

The menu offers:

1. Load songs (only once per session; a progress bar is shown every 1000 songs)
2. Search by genre (a single word; an unknown genre shows the list of genres
   and asks again)
3. Search by artist (a whole line; an unknown artist asks again)
4. Search by tempo: slow below 80 BPM, moderate from 80 up to and including
   120 BPM, fast above; then show all songs or a chosen number of them
5. Create a playlist (a name already in use is refused)
6. Add a song to a playlist, by song ID
7. Show the songs in a playlist
8. Quit

Options 2, 3, 4 and 6 need the songs to be loaded first. Song IDs, genres,
artists and playlist names are matched without regard to ASCII case. The
program also stops when its input ends.

## Dataset format

The first line of the CSV is a header and is skipped. Each following line
describes one song and needs at least 21 fields. The columns used are:

| Column | Meaning                            |
|--------|------------------------------------|
| 0      | track ID                           |
| 2      | artists, separated by `;`          |
| 3      | album name                         |
| 4      | track name                         |
| 18     | tempo (BPM)                        |
| 20     | genre                              |

Fields may be enclosed in double quotes so that they can hold commas. When
two songs share an ID, the first one is kept for lookups by ID.

## Using it as a library

```python
from spotifind.catalog import Catalog, Playlists, tempo_category

catalog = Catalog()
catalog.load_file("song_dataset.csv", None)
for song in catalog.by_genre("acoustic"):
    print(song.track_name, tempo_category(song.tempo))

playlists = Playlists()
playlists.create("Favourites")
playlists.add_song("Favourites", catalog.song(song.id))
```

- `spotifind.catalog`: `Song`, `Catalog` (`add`, `load`, `load_file`,
  `require_loaded`, `song`, `by_genre`, `by_artist`, `by_tempo`),
  `Playlists` (`create`, `add_song`, `songs`), `tempo_category`,
  `song_from_fields`. Queries before any song is loaded raise
  `NotLoadedError`; unknown keys raise `KeyError`.
- `spotifind.csvline`: `parse_csv_line`, `read_csv`, `split_string`.
- `spotifind.hashmap`: `HashMap`, a linear-probing map with case-insensitive
  string keys, and `hash_key`, `keys_equal`.
- `spotifind.cli`: `Session` runs the menu over any pair of text streams;
  `format_song`, `render_songs`, `progress_bar`, `render_genres` and
  `render_playlists` build its output.

## What it does not do

Playlists live only for the length of a session: they are not saved to disk
and are lost when the program ends. Songs cannot be removed from a playlist,
and the dataset is only read, never written.

## Running the tests

```
pip install .[test]
pytest
```