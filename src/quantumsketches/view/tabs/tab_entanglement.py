"""
Entanglement Control Panel
"""
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QHBoxLayout
from PySide6.QtCore import Signal, Qt

from quantumsketches.config import DISTANCE
from quantumsketches.model.state import EntangledPair
from quantumsketches.view.widgets.labeled_slider import LabeledSlider


class EntanglementControlPanel(QWidget):
    state_changed = Signal()

    def __init__(self, pair: EntangledPair) -> None:
        super().__init__()
        self.pair = pair

        layout = QVBoxLayout(self)

        grp = QGroupBox("Separation")
        form = QFormLayout(grp)
        self.sld_distance = LabeledSlider(DISTANCE, lambda v: f"{v} units")
        self.sld_distance.set_value(self.pair.distance)
        self.sld_distance.value_changed.connect(self.on_distance_changed)
        form.addRow("Distance:", self.sld_distance)
        layout.addWidget(grp)

        self.btn_generate = QPushButton("Generate Entangled Pair")
        self.btn_generate.setMinimumHeight(40)
        self.btn_generate.clicked.connect(self.on_generate_clicked)
        layout.addWidget(self.btn_generate)

        hbox = QHBoxLayout()
        self.btn_measure_a = QPushButton("Measure A")
        self.btn_measure_a.clicked.connect(lambda: self.on_measure_clicked("A"))
        hbox.addWidget(self.btn_measure_a)

        self.btn_measure_b = QPushButton("Measure B")
        self.btn_measure_b.clicked.connect(lambda: self.on_measure_clicked("B"))
        hbox.addWidget(self.btn_measure_b)
        layout.addLayout(hbox)

        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        layout.addStretch()
        self.update_buttons()

    # --- SLOTS ---

    def on_distance_changed(self, value: int) -> None:
        self.pair.set_distance(value)
        self.state_changed.emit()

    def on_generate_clicked(self) -> None:
        self.pair.generate()
        self.update_buttons()
        self.state_changed.emit()

    def on_measure_clicked(self, label: str) -> None:
        self.pair.measure(label)
        self.update_buttons()
        self.state_changed.emit()

    def update_buttons(self) -> None:
        self.btn_measure_a.setEnabled(self.pair.can_measure("A"))
        self.btn_measure_b.setEnabled(self.pair.can_measure("B"))

        if not self.pair.generated:
            self.lbl_status.setText("No pair generated.")
            self.lbl_status.setStyleSheet("color: gray;")
        elif self.pair.collapsed:
            self.lbl_status.setText(f"A: {self.pair.a.spin.ket}   B: {self.pair.b.spin.ket}")
            self.lbl_status.setStyleSheet("font-weight: bold;")
        else:
            self.lbl_status.setText("Entangled, not measured.")
            self.lbl_status.setStyleSheet("color: gray;")
