"""App window: hosts the AttractorView with a status bar."""

import logging

from PyQt6.QtWidgets import QMainWindow, QStatusBar

from attractor.view import AttractorView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window for the Lorenz attractor explorer."""

    def __init__(self, engine=None):
        super().__init__()
        self.setWindowTitle("Lorenz Attractor")
        self.resize(1200, 750)

        # --- View ---
        self.attractor_view = AttractorView(engine)
        self.setCentralWidget(self.attractor_view)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.addWidget(self.attractor_view.frame_label)
        self._status_bar.addWidget(self.attractor_view.time_label)
        self._status_bar.addWidget(self.attractor_view.position_label)

    def showEvent(self, event):
        super().showEvent(event)
        self.attractor_view.start()
        logger.info("Frame loop started at %d fps", self.attractor_view.FPS)

    def closeEvent(self, event):
        self.attractor_view.stop()
        super().closeEvent(event)
