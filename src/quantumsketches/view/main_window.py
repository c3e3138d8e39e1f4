"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the sketch tabs and the
status bar.

Why is this file needed?
------------------------
1. Layout: Each sketch is a page of a QStackedWidget selected by a tab bar.
   A page is a splitter with the control panel on one side and the scrolling
   canvas on the other.
2. Responsiveness: Window resizes are routed to the canvases, which recompute
   their geometry; narrow windows stack the controls above the canvas.
3. Routing: The animation clock, the theme preference and the profile dialog
   are connected here.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QTabBar, QStackedWidget, QFrame
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction

from quantumsketches.app.application import VISIBLE_APP_NAME
from quantumsketches.config import DEFAULT_WINDOW_SIZE
from quantumsketches.controller.animation import AnimationClock
from quantumsketches.controller.settings import save_theme
from quantumsketches.model.colors import Theme, palette_for
from quantumsketches.model.geometry import SIDE_BY_SIDE_THRESHOLD
from quantumsketches.model.state import DoubleSlitState, SuperpositionState, EntangledPair
from quantumsketches.view.dialogs.intensity_profile_dialog import IntensityProfileDialog
from quantumsketches.view.widgets.sketch_canvas import SketchCanvas
from quantumsketches.view.widgets.double_slit_canvas import DoubleSlitCanvas
from quantumsketches.view.widgets.superposition_canvas import SuperpositionCanvas
from quantumsketches.view.widgets.entanglement_canvas import EntanglementCanvas

# Import Control Panels
from quantumsketches.view.tabs.tab_double_slit import DoubleSlitControlPanel
from quantumsketches.view.tabs.tab_superposition import SuperpositionControlPanel
from quantumsketches.view.tabs.tab_entanglement import EntanglementControlPanel

logger = logging.getLogger(__name__)

# Horizontal room kept free around a container-fitted canvas
CONTAINER_PADDING = 40


class SketchPage(QSplitter):
    """Control panel plus the canvas in a scroll area."""

    def __init__(self, panel: QWidget, canvas: SketchCanvas) -> None:
        super().__init__(Qt.Horizontal)
        self.panel = panel
        self.canvas = canvas

        self.panel.setMinimumWidth(260)
        self.addWidget(self.panel)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(False)
        self.scroll.setAlignment(Qt.AlignCenter)
        self.scroll.setFrameShape(QFrame.NoFrame)
        self.scroll.setWidget(self.canvas)
        self.addWidget(self.scroll)

        self.setStretchFactor(0, 1)
        self.setStretchFactor(1, 4)

    def apply_viewport(self, width: int, height: int) -> None:
        """Re-layout for a window of the given size."""
        stacked = width <= SIDE_BY_SIDE_THRESHOLD
        orientation = Qt.Vertical if stacked else Qt.Horizontal
        if self.orientation() != orientation:
            self.setOrientation(orientation)
            if stacked:
                self.setSizes([self.panel.sizeHint().height(), max(height - self.panel.sizeHint().height(), 0)])
            else:
                panel_width = max(int(width * 0.2), 260)
                self.setSizes([panel_width, max(width - panel_width, 0)])

        if stacked:
            container = width
        else:
            container = max(width - self.sizes()[0], 0)
        self.canvas.apply_viewport(width, height, max(container - CONTAINER_PADDING, 0))


class MainWindow(QMainWindow):
    def __init__(self, theme: Theme = Theme.LIGHT) -> None:
        super().__init__()
        self.theme = theme
        palette = palette_for(theme)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(*DEFAULT_WINDOW_SIZE)

        # --- MODEL ---
        self.double_slit = DoubleSlitState()
        self.superposition = SuperpositionState()
        self.entanglement = EntangledPair()

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        # Vertical Layout: Tabs on Top, Pages Below
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setDrawBase(True)
        self.tab_bar.setShape(QTabBar.RoundedNorth)
        self.tab_bar.setExpanding(True)

        self.tab_bar.addTab("1. Double Slit")
        self.tab_bar.addTab("2. Superposition")
        self.tab_bar.addTab("3. Entanglement")

        self.tab_bar.setStyleSheet("""
                    QTabBar::tab { height: 35px; min-width: 100px; }
                    QTabBar::tab:selected { font-weight: bold; }
                """)

        main_layout.addWidget(self.tab_bar)

        # --- 2. PAGES ---
        self.pages_stack = QStackedWidget()
        main_layout.addWidget(self.pages_stack)

        self.double_slit_panel = DoubleSlitControlPanel(self.double_slit)
        self.double_slit_canvas = DoubleSlitCanvas(self.double_slit, palette)
        self.superposition_panel = SuperpositionControlPanel(self.superposition)
        self.superposition_canvas = SuperpositionCanvas(self.superposition, palette)
        self.entanglement_panel = EntanglementControlPanel(self.entanglement)
        self.entanglement_canvas = EntanglementCanvas(self.entanglement, palette)

        # Order must match Tab Bar order
        self.pages: list[SketchPage] = [
            SketchPage(self.double_slit_panel, self.double_slit_canvas),
            SketchPage(self.superposition_panel, self.superposition_canvas),
            SketchPage(self.entanglement_panel, self.entanglement_canvas),
        ]
        for page in self.pages:
            self.pages_stack.addWidget(page)

        # --- ANIMATION ---
        self.clock = AnimationClock(parent=self)
        self.clock.frame.connect(self.on_frame)

        # --- SIGNAL CONNECTIONS ---
        self.tab_bar.currentChanged.connect(self.on_tab_changed)
        self.double_slit_panel.parameters_changed.connect(self.double_slit_canvas.update)
        self.double_slit_panel.observer_toggled.connect(self.on_observer_toggled)
        self.double_slit_panel.profile_requested.connect(self.on_show_profile)
        self.superposition_panel.state_changed.connect(self.superposition_canvas.update)
        self.entanglement_panel.state_changed.connect(self.entanglement_canvas.update)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.statusBar().showMessage("Ready", 3000)
        self.clock.start()

    def _create_actions(self) -> None:
        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

        self.act_dark_theme = QAction("Dark theme", self)
        self.act_dark_theme.setCheckable(True)
        self.act_dark_theme.setChecked(self.theme is Theme.DARK)
        self.act_dark_theme.toggled.connect(self.on_theme_toggled)

        self.act_pause = QAction("Pause animation", self)
        self.act_pause.setCheckable(True)
        self.act_pause.setShortcut("Ctrl+Space")
        self.act_pause.toggled.connect(self.on_pause_toggled)

        self.act_profile = QAction("Intensity profile...", self)
        self.act_profile.setShortcut("Ctrl+P")
        self.act_profile.triggered.connect(self.on_show_profile)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_dark_theme)
        view_menu.addSeparator()
        view_menu.addAction(self.act_pause)

        tools_menu = menu_bar.addMenu("&Tools")
        tools_menu.addAction(self.act_profile)

    # --- HELPER METHODS ---

    def current_page(self) -> SketchPage:
        return self.pages[self.pages_stack.currentIndex()]

    def relayout(self) -> None:
        """Recompute the geometry of every sketch for the current window size."""
        size = self.centralWidget().size()
        for page in self.pages:
            page.apply_viewport(size.width(), size.height())

    # --- SLOTS ---

    def on_frame(self, frames: float) -> None:
        """Advance and repaint only the visible sketch."""
        canvas = self.current_page().canvas
        canvas.advance(frames)
        canvas.update()

    def on_tab_changed(self, index: int) -> None:
        self.pages_stack.setCurrentIndex(index)
        self.act_profile.setEnabled(index == 0)
        logger.debug(f"Switched to sketch {index}.")

    def on_observer_toggled(self, active: bool) -> None:
        self.statusBar().showMessage(f"Observer {'ON' if active else 'OFF'}", 2000)
        self.double_slit_canvas.update()

    def on_theme_toggled(self, checked: bool) -> None:
        theme = Theme.DARK if checked else Theme.LIGHT
        save_theme(theme)
        self.statusBar().showMessage(f"{theme.value.capitalize()} theme will be used after restart.", 5000)

    def on_pause_toggled(self, paused: bool) -> None:
        if paused:
            self.clock.stop()
        else:
            self.clock.start()

    def on_show_profile(self) -> None:
        dialog = IntensityProfileDialog(self.double_slit, self.double_slit_canvas.scene_geometry, self)
        dialog.exec()

    # --- EVENTS ---

    def resizeEvent(self, event, /) -> None:
        super().resizeEvent(event)
        # Let the layouts settle before measuring the splitter panes
        QTimer.singleShot(0, self.relayout)

    def showEvent(self, event, /) -> None:
        super().showEvent(event)
        QTimer.singleShot(0, self.relayout)

    def closeEvent(self, event, /) -> None:
        self.clock.stop()
        event.accept()
