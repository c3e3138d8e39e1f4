"""
Double-Slit Control Panel
"""
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout
from PySide6.QtCore import Signal

from quantumsketches.config import WAVELENGTH, SLIT_SEPARATION, SLIT_WIDTH, WAVE_SPEED
from quantumsketches.model.state import DoubleSlitState
from quantumsketches.view.widgets.labeled_slider import LabeledSlider


class DoubleSlitControlPanel(QWidget):
    parameters_changed = Signal()
    # Signal: new observer state
    observer_toggled = Signal(bool)
    profile_requested = Signal()

    def __init__(self, state: DoubleSlitState) -> None:
        super().__init__()
        self.state = state

        layout = QVBoxLayout(self)

        # --- Light ---
        grp_light = QGroupBox("Light")
        form_light = QFormLayout(grp_light)

        self.sld_wavelength = LabeledSlider(WAVELENGTH, lambda v: f"{v} nm")
        self.sld_wavelength.value_changed.connect(self.on_wavelength_changed)
        form_light.addRow("Wavelength:", self.sld_wavelength)

        self.sld_speed = LabeledSlider(WAVE_SPEED)
        self.sld_speed.value_changed.connect(self.on_speed_changed)
        form_light.addRow("Wave speed:", self.sld_speed)

        layout.addWidget(grp_light)

        # --- Slits ---
        grp_slits = QGroupBox("Slits")
        form_slits = QFormLayout(grp_slits)

        self.sld_separation = LabeledSlider(SLIT_SEPARATION, lambda v: f"{v} μm")
        self.sld_separation.value_changed.connect(self.on_separation_changed)
        form_slits.addRow("Slit separation:", self.sld_separation)

        self.sld_width = LabeledSlider(SLIT_WIDTH)
        self.sld_width.value_changed.connect(self.on_width_changed)
        form_slits.addRow("Slit width:", self.sld_width)

        layout.addWidget(grp_slits)

        # --- Measurement ---
        grp_observer = QGroupBox("Measurement")
        l_observer = QVBoxLayout(grp_observer)

        self.btn_observer = QPushButton("👁 Observer OFF")
        self.btn_observer.setCheckable(True)
        self.btn_observer.setMinimumHeight(40)
        self.btn_observer.clicked.connect(self.on_observer_clicked)
        l_observer.addWidget(self.btn_observer)

        self.lbl_hint = QLabel("Watching which slit the light takes destroys the interference pattern.")
        self.lbl_hint.setWordWrap(True)
        self.lbl_hint.setStyleSheet("color: gray;")
        l_observer.addWidget(self.lbl_hint)

        layout.addWidget(grp_observer)

        self.btn_profile = QPushButton("Show intensity profile…")
        self.btn_profile.clicked.connect(self.profile_requested.emit)
        layout.addWidget(self.btn_profile)

        layout.addStretch()

        self.load_from_state()

    # --- SLOTS ---

    def on_wavelength_changed(self, value: int) -> None:
        self.state.params.set_wavelength(value)
        self.parameters_changed.emit()

    def on_speed_changed(self, value: int) -> None:
        self.state.params.set_wave_speed(value)
        self.parameters_changed.emit()

    def on_separation_changed(self, value: int) -> None:
        self.state.params.set_slit_separation(value)
        self.parameters_changed.emit()

    def on_width_changed(self, value: int) -> None:
        self.state.params.set_slit_width(value)
        self.parameters_changed.emit()

    def on_observer_clicked(self) -> None:
        active = self.state.toggle_observer()
        self._sync_observer_button()
        self.observer_toggled.emit(active)

    def _sync_observer_button(self) -> None:
        active = self.state.observer_active
        self.btn_observer.setChecked(active)
        self.btn_observer.setText("👁 Observer ON" if active else "👁 Observer OFF")

    def load_from_state(self) -> None:
        """Populate every control from the current state without feedback loops."""
        params = self.state.params
        self.sld_wavelength.set_value(params.wavelength)
        self.sld_speed.set_value(params.wave_speed)
        self.sld_separation.set_value(params.slit_separation)
        self.sld_width.set_value(params.slit_width)
        self._sync_observer_button()
