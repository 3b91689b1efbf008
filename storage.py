# storage.py

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

from data import FILMS  # used for the first seeding
from errors import DataError, FilmNotFoundError, StorageError
from models import Film, Ticket

logger = logging.getLogger(__name__)

DB_PATH = Path(__file__).resolve().parent / "films.db"

_FILM_COLUMNS = (
    "id, title, poster, description, runtime, showtime, capacity, tickets_sold"
)


def _row_to_film(row: sqlite3.Row) -> Film:
    return Film(
        id=row["id"],
        title=row["title"],
        poster=row["poster"],
        description=row["description"],
        runtime=row["runtime"],
        showtime=row["showtime"],
        capacity=row["capacity"],
        tickets_sold=row["tickets_sold"],
    )


class LocalFilmSource:
    """
    Film source backed by a local sqlite file.

    There is no remote, so every mutation is applied as soon as it is
    written. The tables are created on first use and seeded from the
    bundled film list (or from the given seed films) when empty.
    """

    def __init__(
        self,
        db_path: Union[str, Path] = DB_PATH,
        seed: Optional[Iterable[Mapping]] = None,
    ):
        self.db_path = Path(db_path)
        self._seed = list(seed) if seed is not None else FILMS
        self.init_db()

    def __repr__(self) -> str:
        return f"LocalFilmSource({str(self.db_path)!r})"

    def close(self) -> None:
        # a connection is opened per call, nothing stays open
        pass

    def get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _run(self, fn):
        conn = self.get_connection()
        try:
            result = fn(conn.cursor())
            conn.commit()
            return result
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Local store failure on %s", self.db_path)
            raise StorageError(f"Local store failure: {e}") from e
        finally:
            conn.close()

    def init_db(self) -> None:
        """Creates the tables and seeds them if needed."""

        def _create(cur: sqlite3.Cursor) -> None:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS films (
                    position INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    title TEXT NOT NULL,
                    poster TEXT NOT NULL DEFAULT '',
                    description TEXT NOT NULL DEFAULT '',
                    runtime INTEGER NOT NULL DEFAULT 0,
                    showtime TEXT NOT NULL DEFAULT '',
                    capacity INTEGER NOT NULL,
                    tickets_sold INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tickets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    film_id TEXT NOT NULL,
                    number_of_tickets INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            cur.execute("SELECT COUNT(*) FROM films")
            if cur.fetchone()[0] > 0:
                return

            try:
                films = [Film.from_dict(payload) for payload in self._seed]
            except DataError as e:
                raise StorageError(f"Invalid seed film: {e}") from e

            for film in films:
                cur.execute(
                    f"INSERT OR IGNORE INTO films ({_FILM_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        film.id,
                        film.title,
                        film.poster,
                        film.description,
                        film.runtime,
                        film.showtime,
                        film.capacity,
                        film.tickets_sold,
                    ),
                )
            logger.info("Seeded %d films into %s", len(films), self.db_path)

        self._run(_create)

    # ----------------- FILMS -----------------

    def list_films(self) -> List[Film]:
        def _select(cur: sqlite3.Cursor) -> List[Film]:
            cur.execute(f"SELECT {_FILM_COLUMNS} FROM films ORDER BY position")
            return [_row_to_film(row) for row in cur.fetchall()]

        return self._run(_select)

    def get_film(self, film_id: str) -> Film:
        def _select(cur: sqlite3.Cursor) -> Optional[Film]:
            cur.execute(
                f"SELECT {_FILM_COLUMNS} FROM films WHERE id = ? LIMIT 1",
                (str(film_id),),
            )
            row = cur.fetchone()
            return _row_to_film(row) if row else None

        film = self._run(_select)
        if film is None:
            raise FilmNotFoundError(str(film_id))
        return film

    def update_tickets_sold(self, film_id: str, tickets_sold: int) -> Film:
        def _update(cur: sqlite3.Cursor) -> int:
            cur.execute(
                "UPDATE films SET tickets_sold = ? WHERE id = ?",
                (tickets_sold, str(film_id)),
            )
            return cur.rowcount

        if self._run(_update) == 0:
            raise FilmNotFoundError(str(film_id))
        return self.get_film(film_id)

    def delete_film(self, film_id: str) -> None:
        def _delete(cur: sqlite3.Cursor) -> int:
            cur.execute("DELETE FROM films WHERE id = ?", (str(film_id),))
            return cur.rowcount

        if self._run(_delete) == 0:
            raise FilmNotFoundError(str(film_id))

    # ----------------- TICKETS -----------------

    def create_ticket(self, ticket: Ticket) -> Ticket:
        def _insert(cur: sqlite3.Cursor) -> int:
            cur.execute(
                "INSERT INTO tickets (film_id, number_of_tickets) VALUES (?, ?)",
                (ticket.film_id, ticket.number_of_tickets),
            )
            return cur.lastrowid

        ticket_id = self._run(_insert)
        return Ticket(
            film_id=ticket.film_id,
            number_of_tickets=ticket.number_of_tickets,
            id=str(ticket_id),
        )

    def count_tickets(self, film_id: str) -> int:
        """How many seats were sold through this store for a film."""

        def _count(cur: sqlite3.Cursor) -> int:
            cur.execute(
                "SELECT COALESCE(SUM(number_of_tickets), 0) FROM tickets WHERE film_id = ?",
                (str(film_id),),
            )
            return cur.fetchone()[0]

        return self._run(_count)
