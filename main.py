import sys
import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Callable

import yaml
import numpy as np
from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QVBoxLayout, QWidget, QPushButton, QHBoxLayout, QGraphicsView, QGraphicsScene,
    QGridLayout, QFileDialog, QLineEdit, QLabel, QDialog, QMessageBox, QComboBox, QAction
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPixmap, QImage

from fractal_painting.cli import parse_args
from fractal_painting.errors import SurfaceUnavailable
from fractal_painting.painters import DragonPainter, KochPainter
from fractal_painting.parameters import generate_dragon_settings
from fractal_painting.settings import (
    load_settings, save_settings, load_dragon_settings, save_dragon_settings
)
from fractal_painting.styles import palette_from_colormap, available_colormaps, get_stylesheet
from fractal_painting.surface import PillowImageSurface

# Setup logging
LOG_FILE = "log.txt"

logger = logging.getLogger()
logger.setLevel(logging.INFO)
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)
console_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
console_handler.setFormatter(console_formatter)
file_handler = logging.FileHandler(LOG_FILE)
file_handler.setLevel(logging.INFO)
file_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
file_handler.setFormatter(file_formatter)
logger.addHandler(console_handler)
logger.addHandler(file_handler)


class MenuCategory(Enum):
    FILE = "File"
    SETTINGS = "Settings"
    FRACTALS = "Fractals"


@dataclass
class UiAction:
    category: MenuCategory
    name: str
    description: str
    perform: Callable[[], None]


class ImageView(QGraphicsView):
    """Shows the surface image; used as the surface's update callback."""

    def __init__(self):
        super().__init__()
        self.graphics_scene = QGraphicsScene()
        self.setScene(self.graphics_scene)
        self.setRenderHints(self.renderHints() | Qt.SmoothTransformation)

    def display_image(self, image):
        colored = np.array(image, dtype=np.uint8)
        height, width, _ = colored.shape
        q_image = QImage(colored.data, width, height, 3 * width, QImage.Format_RGB888)

        pixmap = QPixmap.fromImage(q_image)
        self.graphics_scene.clear()
        self.graphics_scene.addPixmap(pixmap)
        QApplication.processEvents()


class SettingsDialog(QDialog):
    """Edits the fields of a settings dataclass, one line edit per field."""

    INPUT_WIDTH = 120

    def __init__(self, parent, settings, title):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.settings = settings
        self.fields = {}

        layout = QGridLayout()
        for row, field in enumerate(fields(settings)):
            label = QLabel(f"{field.name.replace('_', ' ').capitalize()}:")
            label.setAlignment(Qt.AlignRight)
            line_edit = QLineEdit(str(getattr(settings, field.name)))
            line_edit.setFixedWidth(self.INPUT_WIDTH)
            layout.addWidget(label, row, 0)
            layout.addWidget(line_edit, row, 1)
            self.fields[field.name] = (field.type, line_edit)

        buttons = QHBoxLayout()
        ok_button = QPushButton("OK")
        ok_button.clicked.connect(self.on_accept)
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(ok_button)
        buttons.addWidget(cancel_button)
        layout.addLayout(buttons, len(self.fields), 0, 1, 2)
        self.setLayout(layout)

    def on_accept(self):
        try:
            values = {name: field_type(line_edit.text()) for name, (field_type, line_edit) in self.fields.items()}
        except ValueError:
            logging.warning("Invalid input in one or more fields. Please enter numeric values.")
            QMessageBox.warning(self, "Invalid Input", "Please enter numeric values.")
            return
        self.settings = replace(self.settings, **values)
        self.accept()

    @classmethod
    def edit(cls, parent, settings, title):
        """Return the edited settings, or None when the dialog was cancelled."""
        dialog = cls(parent, settings, title)
        if dialog.exec() == QDialog.Accepted:
            return dialog.settings
        return None


class FractalApp(QMainWindow):
    DEFAULT_SAVE_PATH = "./saves"

    def __init__(self, app_settings, settings_path, seed=None):
        super().__init__()
        self.app_settings = app_settings
        self.settings_path = settings_path
        self.seed = seed
        self.palette = palette_from_colormap(app_settings.colormap)
        self.dragon_settings = None

        self.image_view = ImageView()
        image_settings = app_settings.image_settings
        self.surface = PillowImageSurface(
            image_settings.width, image_settings.height, on_update=self.image_view.display_image
        )

        self.init_ui()
        self.surface.notify_updated()

    def init_ui(self):
        self.setWindowTitle("Fractal Painter")
        self.setStyleSheet(get_stylesheet(self.palette))

        main_layout = QVBoxLayout()
        main_layout.addWidget(self.image_view)
        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self.setup_menu(self.create_actions())
        self.resize(self.app_settings.image_settings.width + 40, self.app_settings.image_settings.height + 80)

    def create_actions(self):
        return [
            UiAction(MenuCategory.FILE, "Load dragon...", "Load dragon settings and paint", self.load_dragon),
            UiAction(MenuCategory.FILE, "Save dragon...", "Save the last dragon settings", self.save_dragon),
            UiAction(MenuCategory.SETTINGS, "Image...", "Image size", self.edit_image_settings),
            UiAction(MenuCategory.SETTINGS, "Palette...", "Colors of the fractal", self.choose_palette),
            UiAction(MenuCategory.FRACTALS, "Dragon", "Heighway dragon", self.paint_dragon),
            UiAction(MenuCategory.FRACTALS, "Koch curve", "Koch curve", self.paint_koch),
        ]

    def setup_menu(self, actions):
        """Add one menu per category, in category order."""
        menu_bar = self.menuBar()
        for category in MenuCategory:
            menu = menu_bar.addMenu(category.value)
            for ui_action in actions:
                if ui_action.category != category:
                    continue
                action = QAction(ui_action.name, self)
                action.setToolTip(ui_action.description)
                action.setStatusTip(ui_action.description)
                action.triggered.connect(ui_action.perform)
                menu.addAction(action)

    def run_painter(self, painter):
        try:
            painter.paint()
        except SurfaceUnavailable as e:
            logging.warning(f"Could not paint: {e}")
            QMessageBox.warning(self, "Busy", str(e))

    def paint_dragon(self):
        logging.info("Generating dragon settings...")
        settings = generate_dragon_settings(np.random.default_rng(self.seed))
        settings = SettingsDialog.edit(self, settings, "Dragon")
        if settings is not None:
            self.paint_dragon_with(settings)

    def paint_dragon_with(self, settings):
        try:
            painter = DragonPainter(self.surface, settings, self.palette, seed=self.seed)
        except ValueError as e:
            logging.warning(f"Invalid dragon settings: {e}")
            QMessageBox.warning(self, "Invalid Settings", str(e))
            return
        self.dragon_settings = settings
        self.run_painter(painter)

    def paint_koch(self):
        self.run_painter(KochPainter(self.surface, self.palette))

    def edit_image_settings(self):
        image_settings = SettingsDialog.edit(self, self.app_settings.image_settings, "Image")
        if image_settings is None:
            return
        if image_settings.width <= 0 or image_settings.height <= 0:
            logging.warning("Image size must be positive.")
            QMessageBox.warning(self, "Invalid Input", "Image size must be positive.")
            return
        self.app_settings.image_settings = image_settings
        try:
            self.surface.recreate(self.app_settings.image_settings)
        except SurfaceUnavailable as e:
            logging.warning(f"Could not resize image: {e}")
            return
        logging.info(f"Image resized to {image_settings.width}x{image_settings.height}")
        save_settings(self.settings_path, self.app_settings)

    def choose_palette(self):
        dialog = QDialog(self)
        dialog.setWindowTitle("Palette")
        layout = QHBoxLayout()
        colormap_label = QLabel("Colors:")
        colormap_label.setAlignment(Qt.AlignRight)
        colormap_dropdown = QComboBox()
        colormap_dropdown.setToolTip("Select a colormap for the fractal")
        colormap_dropdown.addItems(available_colormaps())
        colormap_dropdown.setCurrentText(self.app_settings.colormap)
        ok_button = QPushButton("OK")
        ok_button.clicked.connect(dialog.accept)
        layout.addWidget(colormap_label)
        layout.addWidget(colormap_dropdown)
        layout.addWidget(ok_button)
        dialog.setLayout(layout)

        if dialog.exec() != QDialog.Accepted:
            return
        colormap_name = colormap_dropdown.currentText()
        logging.info(f"Changing colormap to: {colormap_name}")
        self.app_settings.colormap = colormap_name
        self.palette = palette_from_colormap(colormap_name)
        self.setStyleSheet(get_stylesheet(self.palette))
        save_settings(self.settings_path, self.app_settings)

    def save_dragon(self):
        """Save the last painted dragon settings to a YAML file."""
        if self.dragon_settings is None:
            logging.info("No dragon painted yet.")
            return
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Dragon Settings", self.DEFAULT_SAVE_PATH, "YAML Files (*.yaml);;All Files (*)"
        )
        if not file_path:
            return
        try:
            save_dragon_settings(file_path, self.dragon_settings)
        except OSError as e:
            logging.warning(f"Could not save dragon settings to {file_path}: {e}")
            QMessageBox.warning(self, "Save Failed", str(e))

    def load_dragon(self):
        """Load dragon settings from a YAML file and paint them."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Load Dragon Settings", self.DEFAULT_SAVE_PATH, "YAML Files (*.yaml);;All Files (*)"
        )
        if not file_path:
            return
        try:
            settings = load_dragon_settings(file_path)
        except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError) as e:
            logging.warning(f"Could not read dragon settings from {file_path}: {e}")
            QMessageBox.warning(self, "Invalid File", str(e))
            return
        self.paint_dragon_with(settings)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)


def main():
    args = parse_args()
    app = QApplication(sys.argv)
    main_window = FractalApp(load_settings(args.settings), args.settings, seed=args.seed)
    main_window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
