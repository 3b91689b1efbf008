import logging
from typing import Dict, Optional, Set

from PyQt5.QtCore import QObject, Qt, QThreadPool, QTimer, pyqtSignal
from PyQt5.QtGui import QColor, QPalette, QPixmap
from PyQt5.QtWidgets import (
    QGraphicsDropShadowEffect,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from config import Settings
from controller import (
    CatalogController,
    CatalogEvent,
    Decision,
    Notice,
    PendingAction,
    StateChanged,
    TicketIssued,
)
from i18n import get_translations
from state import SOLD_OUT_LABEL, CatalogState, detail_view, list_items
from themes import THEMES, Theme, apply_theme_to_palette, stylesheet
from ticket_pdf import generate_ticket_pdf, open_with_default_viewer
from workers import Task, fetch_poster, run_in_background

logger = logging.getLogger(__name__)

NOTIFICATION_MS = 3000
POSTER_WIDTH = 240


class EventBridge(QObject):
    """Carries controller events from worker threads to the GUI thread."""

    received = pyqtSignal(object)


class MainWindow(QMainWindow):
    def __init__(self, controller: CatalogController, settings: Settings):
        super().__init__()

        self.controller = controller
        self.settings = settings

        self.current_lang = settings.lang
        self.translations = get_translations(self.current_lang)
        self.current_theme: Theme = THEMES[settings.theme]

        self.state = controller.state
        self._tasks: Set[Task] = set()
        self._poster_url: Optional[str] = None
        self.labels: Dict[str, QLabel] = {}

        self.bridge = EventBridge()
        self.bridge.received.connect(self._on_event)
        self._unsubscribe = controller.subscribe(self.bridge.received.emit)

        self._notice_timer = QTimer(self)
        self._notice_timer.setSingleShot(True)
        self._notice_timer.timeout.connect(lambda: self.notification_label.hide())

        self.setMinimumSize(820, 520)
        self.resize(1080, 680)

        self._build_ui()
        self._apply_theme(settings.theme)
        self._update_texts()
        self._render(self.state)

    # ---------- helpers ----------

    def _t(self, key: str) -> str:
        return self.translations.get(key, key)

    def _run(self, fn, *args, on_done=None) -> None:
        task = Task(fn, *args)
        if on_done is not None:
            task.signals.finished.connect(on_done)
        task.signals.failed.connect(self._on_task_error)
        task.signals.finished.connect(lambda _result, t=task: self._tasks.discard(t))
        task.signals.failed.connect(lambda _message, t=task: self._tasks.discard(t))
        self._tasks.add(task)
        run_in_background(task)

    def start(self) -> None:
        self._run(self.controller.load_catalog)

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        QThreadPool.globalInstance().waitForDone(int(self.settings.timeout * 1000))
        self.controller.close()
        super().closeEvent(event)

    # ---------- UI BUILD ----------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)

        outer = QVBoxLayout()
        outer.setContentsMargins(16, 12, 16, 12)
        outer.setSpacing(10)
        central.setLayout(outer)

        main_layout = QHBoxLayout()
        main_layout.setSpacing(18)
        main_layout.addWidget(self._build_list_panel(), 2)
        main_layout.addWidget(self._build_detail_panel(), 5)
        outer.addLayout(main_layout, 1)

        bottom = QHBoxLayout()
        self.notification_label = QLabel("")
        self.notification_label.setObjectName("notification")
        self.notification_label.setWordWrap(True)
        self.notification_label.hide()
        self.loading_label = QLabel("")
        bottom.addWidget(self.notification_label, 1)
        bottom.addWidget(self.loading_label)
        bottom.addWidget(self._build_settings_row())
        outer.addLayout(bottom)

    def _build_list_panel(self) -> QGroupBox:
        self.films_group = QGroupBox(self._t("films_group"))
        self._apply_card_shadow(self.films_group)
        layout = QVBoxLayout()
        layout.setSpacing(8)
        self.films_group.setLayout(layout)

        self.subtitle_label = QLabel(self._t("subtitle"))
        self.subtitle_label.setWordWrap(True)
        self.subtitle_label.setStyleSheet("font-size: 11px;")
        layout.addWidget(self.subtitle_label)

        self.search_edit = QLineEdit()
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(self.controller.filter_list)
        layout.addWidget(self.search_edit)

        self.films_list = QListWidget()
        self.films_list.setSelectionMode(QListWidget.SingleSelection)
        self.films_list.itemClicked.connect(self._on_film_clicked)
        layout.addWidget(self.films_list, 1)

        self.reload_btn = QPushButton(self._t("reload_button"))
        self.reload_btn.setObjectName("secondaryButton")
        self.reload_btn.clicked.connect(self.start)
        layout.addWidget(self.reload_btn)
        return self.films_group

    def _build_detail_panel(self) -> QGroupBox:
        self.details_group = QGroupBox(self._t("details_group"))
        self._apply_card_shadow(self.details_group)
        row = QHBoxLayout()
        row.setSpacing(16)
        self.details_group.setLayout(row)

        self.poster_label = QLabel()
        self.poster_label.setFixedWidth(POSTER_WIDTH)
        self.poster_label.setAlignment(Qt.AlignTop | Qt.AlignHCenter)
        row.addWidget(self.poster_label)

        info = QVBoxLayout()
        info.setSpacing(8)

        self.title_label = QLabel("")
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet("font-size: 20px; font-weight: 600;")
        info.addWidget(self.title_label)

        self.description_label = QLabel("")
        self.description_label.setWordWrap(True)
        info.addWidget(self.description_label)

        self.runtime_value = self._value_row(info, "runtime_label")
        self.showtime_value = self._value_row(info, "showtime_label")
        self.available_value = self._value_row(info, "available_label")

        self.buy_btn = QPushButton(self._t("buy_button"))
        self.buy_btn.setEnabled(False)
        self.buy_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.buy_btn.clicked.connect(self._handle_buy)
        info.addWidget(self.buy_btn)

        info.addStretch(1)
        row.addLayout(info, 1)
        return self.details_group

    def _value_row(self, layout: QVBoxLayout, label_key: str) -> QLabel:
        line = QHBoxLayout()
        caption = QLabel(self._t(label_key))
        caption.setStyleSheet("font-size: 11px;")
        value = QLabel("")
        line.addWidget(caption)
        line.addWidget(value, 1)
        layout.addLayout(line)
        self.labels[label_key] = caption
        return value

    def _build_settings_row(self) -> QWidget:
        box = QWidget()
        layout = QHBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)
        box.setLayout(layout)

        self.theme_buttons: Dict[str, QPushButton] = {}
        for name in THEMES:
            btn = QPushButton(name.capitalize())
            btn.setObjectName("secondaryButton")
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, n=name: self._apply_theme(n))
            layout.addWidget(btn)
            self.theme_buttons[name] = btn

        self.lang_buttons: Dict[str, QPushButton] = {}
        for code in ("en", "bg"):
            btn = QPushButton(self._t(f"lang_{code}"))
            btn.setObjectName("secondaryButton")
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, c=code: self._set_language(c))
            layout.addWidget(btn)
            self.lang_buttons[code] = btn
        return box

    def _apply_card_shadow(self, widget: QWidget) -> None:
        effect = QGraphicsDropShadowEffect(self)
        effect.setBlurRadius(24)
        effect.setOffset(0, 10)
        effect.setColor(QColor(15, 23, 42, 110))
        widget.setGraphicsEffect(effect)

    # ---------- THEME & LANGUAGE ----------

    def _apply_theme(self, theme_name: str) -> None:
        theme = THEMES.get(theme_name, THEMES["light"])
        self.current_theme = theme

        palette: QPalette = self.palette()
        apply_theme_to_palette(theme, palette)
        self.setPalette(palette)
        self.setStyleSheet(stylesheet(theme))

        for name, btn in self.theme_buttons.items():
            btn.setChecked(name == theme.name)
        self._render_list(self.state)

    def _set_language(self, lang_code: str) -> None:
        self.current_lang = lang_code
        self.translations = get_translations(lang_code)
        self._update_texts()

    def _update_texts(self) -> None:
        self.setWindowTitle(self._t("app_title"))
        self.films_group.setTitle(self._t("films_group"))
        self.details_group.setTitle(self._t("details_group"))
        self.subtitle_label.setText(self._t("subtitle"))
        self.search_edit.setPlaceholderText(self._t("search_placeholder"))
        self.reload_btn.setText(self._t("reload_button"))

        for key, lbl in self.labels.items():
            lbl.setText(self._t(key))
        for code, btn in self.lang_buttons.items():
            btn.setText(self._t(f"lang_{code}"))
            btn.setChecked(code == self.current_lang)

        self._render(self.state)

    # ---------- RENDERING ----------

    def _on_event(self, event: CatalogEvent) -> None:
        if isinstance(event, StateChanged):
            self._render(event.state)
        elif isinstance(event, Notice):
            self._show_notification(event.message, event.level)
        elif isinstance(event, TicketIssued):
            self._print_ticket(event)

    def _render(self, state: CatalogState) -> None:
        self.state = state
        self.loading_label.setText(self._t("loading") if state.loading else "")
        self._render_list(state)
        self._render_details(state)

    def _render_list(self, state: CatalogState) -> None:
        self.films_list.blockSignals(True)
        self.films_list.clear()

        for entry in list_items(state):
            item = QListWidgetItem()
            item.setData(Qt.UserRole, entry.film_id)
            self.films_list.addItem(item)

            row = QWidget()
            row_layout = QHBoxLayout()
            row_layout.setContentsMargins(6, 2, 6, 2)
            row.setLayout(row_layout)

            title = QLabel(entry.title)
            if entry.sold_out:
                title.setStyleSheet(
                    f"color: {self.current_theme.sold_out}; text-decoration: line-through;"
                )
            row_layout.addWidget(title, 1)

            delete_btn = QPushButton(self._t("delete_button"))
            delete_btn.setObjectName("dangerButton")
            delete_btn.setEnabled(not entry.pending)
            delete_btn.clicked.connect(
                lambda checked, film_id=entry.film_id: self._handle_delete(film_id)
            )
            row_layout.addWidget(delete_btn)

            item.setSizeHint(row.sizeHint())
            self.films_list.setItemWidget(item, row)
            item.setSelected(entry.selected)

        self.films_list.blockSignals(False)

    def _render_details(self, state: CatalogState) -> None:
        view = detail_view(state)

        if view.is_empty and not state.films:
            self.title_label.setText(self._t("no_films") if not state.loading else "")
        else:
            self.title_label.setText(view.title)
        self.description_label.setText(view.description)
        self.runtime_value.setText(view.runtime)
        self.showtime_value.setText(view.showtime)
        self.available_value.setText(view.available)

        self.buy_btn.setEnabled(view.buy_enabled)
        label_key = "sold_out_button" if view.buy_label == SOLD_OUT_LABEL else "buy_button"
        self.buy_btn.setText(self._t(label_key))

        self._render_poster(view.poster)

    def _render_poster(self, url: str) -> None:
        if url == self._poster_url:
            return
        self._poster_url = url
        self.poster_label.clear()
        if url:
            self._run(
                fetch_poster,
                url,
                self.settings.timeout,
                on_done=lambda data, u=url: self._set_poster(u, data),
            )

    def _set_poster(self, url: str, data: bytes) -> None:
        if url != self._poster_url or not data:
            return
        pixmap = QPixmap()
        if pixmap.loadFromData(data):
            self.poster_label.setPixmap(
                pixmap.scaledToWidth(POSTER_WIDTH, Qt.SmoothTransformation)
            )

    def _show_notification(self, message: str, level: str = "info") -> None:
        self.notification_label.setProperty("level", level)
        self.notification_label.style().unpolish(self.notification_label)
        self.notification_label.style().polish(self.notification_label)
        self.notification_label.setText(message)
        self.notification_label.show()
        self._notice_timer.start(NOTIFICATION_MS)

    # ---------- SIGNAL HANDLERS ----------

    def _on_film_clicked(self, item: QListWidgetItem) -> None:
        film_id = item.data(Qt.UserRole)
        if film_id is not None:
            self._run(self.controller.select_film, film_id)

    def _confirm(self, action: PendingAction) -> Decision:
        answer = QMessageBox.question(
            self,
            self._t("confirm_title"),
            action.prompt,
            QMessageBox.Yes | QMessageBox.Cancel,
            QMessageBox.Cancel,
        )
        return Decision.CONFIRM if answer == QMessageBox.Yes else Decision.CANCEL

    def _handle_buy(self) -> None:
        action = self.controller.request_purchase()
        if action is None:
            return
        decision = self._confirm(action)
        if decision is Decision.CONFIRM:
            # stays disabled until the controller reports the request is done
            self.buy_btn.setEnabled(False)
            self._run(self.controller.apply, action, decision)

    def _handle_delete(self, film_id: str) -> None:
        action = self.controller.request_delete(film_id)
        if action is None:
            return
        decision = self._confirm(action)
        if decision is Decision.CONFIRM:
            self._run(self.controller.apply, action, decision)

    def _on_task_error(self, message: str) -> None:
        self._show_notification(f"Error: {message}", "error")

    # ---------- TICKETS ----------

    def _print_ticket(self, event: TicketIssued) -> None:
        if not self.settings.print_tickets:
            return
        try:
            path = generate_ticket_pdf(event.film, event.ticket, self.settings.tickets_dir)
        except OSError as e:
            logger.warning("Ticket stub for film %s was not written: %s", event.film.id, e)
            self._show_notification(f"Could not write ticket stub: {e}", "warning")
            return
        open_with_default_viewer(path)
        self._show_notification(self._t("ticket_saved").format(path=path))
