"""
Qt GUI for AutoPass.

One window:
- Generator: mode, hint, length, character options, strength meter
- History: recent passwords with copy / delete / clear / export
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor, QFont, QGuiApplication
from PySide6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QCheckBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QRadioButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .config import AutoPassConfig, AutoPassError, DEFAULT_CONFIG, GenerationOptions
from .history import HistoryError, open_history
from .state import AppState, clear, generate

PLACEHOLDER = "•" * 12


class AutoPassWindow(QMainWindow):
    """
    Main window. Every widget reads from and writes to ``self.state``.
    """

    def __init__(
        self,
        state: AppState | None = None,
        config: AutoPassConfig | None = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or DEFAULT_CONFIG
        load_error = ""
        if state is None:
            try:
                store = open_history(self.config)
            except HistoryError as exc:
                # Run without history rather than overwrite a file we cannot read.
                store = None
                load_error = f"History disabled: {exc}"
            state = AppState(length=self.config.default_length, history=store)
        self.state = state

        self.setWindowTitle("AutoPass")

        # Secure clipboard auto-clear
        self._clipboard_token: str | None = None
        self._clipboard_timer = QTimer(self)
        self._clipboard_timer.setSingleShot(True)
        self._clipboard_timer.timeout.connect(self._on_clipboard_timeout)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)
        layout.addWidget(self._build_config_group())
        layout.addWidget(self._build_password_group())
        layout.addWidget(self._build_history_group())
        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)
        self.setCentralWidget(central)

        self._toggle_hint_input(self.state.mode == "hint")
        self.refresh_history()
        self._show_status(load_error)
        self.resize(560, 720)

    # -- groups --

    def _build_config_group(self) -> QGroupBox:
        group = QGroupBox("Configuration")
        layout = QVBoxLayout()

        mode_row = QHBoxLayout()
        self.random_radio = QRadioButton("Random")
        self.hint_radio = QRadioButton("From hint")
        self.mode_group = QButtonGroup(self)
        self.mode_group.addButton(self.random_radio)
        self.mode_group.addButton(self.hint_radio)
        (self.hint_radio if self.state.mode == "hint" else self.random_radio).setChecked(True)
        self.hint_radio.toggled.connect(self._on_mode_changed)
        mode_row.addWidget(self.random_radio)
        mode_row.addWidget(self.hint_radio)
        mode_row.addStretch()
        layout.addLayout(mode_row)

        self.hint_edit = QLineEdit(self.state.hint)
        self.hint_edit.setPlaceholderText("e.g. a word you will remember")
        self.hint_edit.textChanged.connect(self._on_hint_changed)
        layout.addWidget(self.hint_edit)

        length_row = QHBoxLayout()
        length_row.addWidget(QLabel("Length"))
        self.length_slider = QSlider(Qt.Horizontal)
        self.length_slider.setRange(self.config.min_length, self.config.max_length)
        self.length_slider.setValue(self.state.length)
        self.length_value_label = QLabel(str(self.state.length))
        self.length_slider.valueChanged.connect(self._on_length_changed)
        length_row.addWidget(self.length_slider, 1)
        length_row.addWidget(self.length_value_label)
        layout.addLayout(length_row)

        opts = self.state.options
        self.uppercase_check = QCheckBox("Uppercase (A-Z)")
        self.uppercase_check.setChecked(opts.uppercase)
        self.numbers_check = QCheckBox("Numbers (0-9)")
        self.numbers_check.setChecked(opts.numbers)
        self.symbols_check = QCheckBox("Symbols (!@#...)")
        self.symbols_check.setChecked(opts.symbols)
        for check in (self.uppercase_check, self.numbers_check, self.symbols_check):
            check.toggled.connect(self._on_options_changed)
            layout.addWidget(check)

        group.setLayout(layout)
        return group

    def _build_password_group(self) -> QGroupBox:
        group = QGroupBox("Password")
        layout = QVBoxLayout()

        self.password_field = QLineEdit(PLACEHOLDER)
        self.password_field.setReadOnly(True)
        self.password_field.setAlignment(Qt.AlignCenter)
        pw_font = QFont("Consolas")
        pw_font.setPointSize(14)
        self.password_field.setFont(pw_font)
        layout.addWidget(self.password_field)

        buttons_row = QHBoxLayout()
        self.generate_button = QPushButton("Generate")
        self.generate_button.clicked.connect(self.on_generate_clicked)
        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(lambda: self.copy_to_clipboard(self.state.current_password))
        buttons_row.addWidget(self.generate_button)
        buttons_row.addWidget(self.copy_button)
        layout.addLayout(buttons_row)

        strength_row = QHBoxLayout()
        self.strength_bar = QProgressBar()
        self.strength_bar.setRange(0, 100)
        self.strength_bar.setTextVisible(False)
        self.strength_label = QLabel("Strength: –")
        strength_row.addWidget(self.strength_bar, 1)
        strength_row.addWidget(self.strength_label)
        layout.addLayout(strength_row)

        group.setLayout(layout)
        return group

    def _build_history_group(self) -> QGroupBox:
        group = QGroupBox("History")
        layout = QVBoxLayout()

        self.history_list = QListWidget()
        self.history_list.itemDoubleClicked.connect(
            lambda item: self.copy_to_clipboard(item.data(Qt.UserRole))
        )
        layout.addWidget(self.history_list)

        row = QHBoxLayout()
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(self.on_delete_clicked)
        self.clear_button = QPushButton("Clear all")
        self.clear_button.clicked.connect(self.on_clear_clicked)
        self.export_button = QPushButton("Export...")
        self.export_button.clicked.connect(self.on_export_clicked)
        for button in (self.delete_button, self.clear_button, self.export_button):
            row.addWidget(button)
        layout.addLayout(row)

        group.setLayout(layout)
        return group

    # -- state sync --

    def _on_mode_changed(self, hint_checked: bool) -> None:
        self.state.mode = "hint" if hint_checked else "random"
        self._toggle_hint_input(hint_checked)

    def _toggle_hint_input(self, show: bool) -> None:
        self.hint_edit.setVisible(show)

    def _on_hint_changed(self, text: str) -> None:
        self.state.hint = text

    def _on_length_changed(self, value: int) -> None:
        self.state.length = value
        self.length_value_label.setText(str(value))

    def _on_options_changed(self, _checked: bool = False) -> None:
        self.state.options = GenerationOptions(
            uppercase=self.uppercase_check.isChecked(),
            numbers=self.numbers_check.isChecked(),
            symbols=self.symbols_check.isChecked(),
        )

    def refresh_history(self) -> None:
        self.history_list.clear()
        store = self.state.history
        if store is None or not len(store):
            placeholder = QListWidgetItem("No passwords generated yet")
            placeholder.setFlags(Qt.NoItemFlags)
            self.history_list.addItem(placeholder)
            return
        for entry in store.entries:
            mode = "Hint" if entry.mode == "hint" else "Random"
            item = QListWidgetItem(f"{entry.password}    [{mode}] {entry.strength.label}")
            item.setData(Qt.UserRole, entry.password)
            item.setForeground(QColor(entry.strength.color))
            self.history_list.addItem(item)

    # -- actions --

    def on_generate_clicked(self) -> None:
        try:
            entry = generate(self.state)
        except AutoPassError as exc:
            self._show_status(str(exc))
            if self.state.mode == "hint":
                self.hint_edit.setFocus()
            return

        self.password_field.setText(entry.password)
        strength = entry.strength
        self.strength_bar.setValue(strength.score)
        self.strength_bar.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {strength.color}; }}"
        )
        self.strength_label.setText(f"Strength: {strength.label}")
        self.strength_label.setStyleSheet(f"color: {strength.color};")
        self.refresh_history()

    def on_delete_clicked(self) -> None:
        row = self.history_list.currentRow()
        if self.state.history is None or row < 0:
            return
        try:
            self.state.history.delete(row)
        except HistoryError as exc:
            self._show_status(str(exc))
            return
        self.refresh_history()
        self._show_status("Password removed")

    def on_clear_clicked(self) -> None:
        if not clear(self.state):
            self._show_status("History is already empty")
            return
        self.password_field.setText(PLACEHOLDER)
        self.strength_bar.setValue(0)
        self.strength_label.setText("Strength: –")
        self.refresh_history()
        self._show_status("All passwords cleared")

    def on_export_clicked(self) -> None:
        if self.state.history is None:
            return
        directory = self._ask_export_directory()
        if not directory:
            return
        try:
            target = self.state.history.export_to_file(Path(directory))
        except HistoryError as exc:
            self._show_status(str(exc))
            return
        self._show_status(f"Passwords exported to {target.name}")

    def _ask_export_directory(self) -> str:
        return QFileDialog.getExistingDirectory(self, "Export passwords to")

    def copy_to_clipboard(self, password: str | None) -> None:
        if not password:
            self._show_status("No password to copy. Generate one first.")
            return
        QGuiApplication.clipboard().setText(password)
        self._clipboard_token = password
        self._clipboard_timer.start(self.config.clipboard_clear_ms)
        self._show_status("Password copied to clipboard (auto-clear in a few seconds).")

    def _on_clipboard_timeout(self) -> None:
        """
        Clear clipboard if it still holds the value we placed.
        """
        if not self._clipboard_token:
            return
        cb = QGuiApplication.clipboard()
        if cb.text() == self._clipboard_token:
            cb.clear()
        self._clipboard_token = None
        self._show_status("Clipboard cleared for safety.")

    def _show_status(self, message: str) -> None:
        self.status_label.setText(message)


def main() -> None:
    app = QApplication(sys.argv)
    window = AutoPassWindow(config=AutoPassConfig.from_env())
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
