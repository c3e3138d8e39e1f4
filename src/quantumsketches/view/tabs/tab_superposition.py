"""
Superposition Control Panel
"""
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QHBoxLayout
from PySide6.QtCore import Signal, Qt

from quantumsketches.config import PROBABILITY
from quantumsketches.model.state import SuperpositionState
from quantumsketches.view.widgets.labeled_slider import LabeledSlider


class SuperpositionControlPanel(QWidget):
    state_changed = Signal()

    def __init__(self, state: SuperpositionState) -> None:
        super().__init__()
        self.state = state

        layout = QVBoxLayout(self)

        grp = QGroupBox("Prepared state")
        form = QFormLayout(grp)

        self.sld_probability = LabeledSlider(PROBABILITY, lambda v: f"{v}%")
        self.sld_probability.set_value(round(self.state.prob_up * 100))
        self.sld_probability.value_changed.connect(self.on_probability_changed)
        form.addRow("P(spin up):", self.sld_probability)

        layout.addWidget(grp)

        # --- Actions ---
        hbox = QHBoxLayout()
        self.btn_measure = QPushButton("Measure")
        self.btn_measure.setMinimumHeight(40)
        self.btn_measure.clicked.connect(self.on_measure_clicked)
        hbox.addWidget(self.btn_measure)

        self.btn_reset = QPushButton("Reset")
        self.btn_reset.setMinimumHeight(40)
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        hbox.addWidget(self.btn_reset)
        layout.addLayout(hbox)

        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.lbl_status)

        layout.addStretch()
        self.update_buttons()

    # --- SLOTS ---

    def on_probability_changed(self, value: int) -> None:
        self.state.set_probability(value / 100)
        self.state_changed.emit()

    def on_measure_clicked(self) -> None:
        self.state.measure()
        self.update_buttons()
        self.state_changed.emit()

    def on_reset_clicked(self) -> None:
        self.state.reset()
        self.update_buttons()
        self.state_changed.emit()

    def update_buttons(self) -> None:
        measured = self.state.measured
        self.btn_measure.setEnabled(not measured)
        if measured:
            self.lbl_status.setText(f"Measured: {self.state.particle.spin.ket}")
            self.lbl_status.setStyleSheet("font-weight: bold;")
        else:
            self.lbl_status.setText("Superposition")
            self.lbl_status.setStyleSheet("color: gray;")
