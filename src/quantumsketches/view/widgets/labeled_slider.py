"""
Labeled Slider
==============
Horizontal QSlider with a live readout label, built from a SliderSpec.
"""
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QWidget

from quantumsketches.config import SliderSpec


class LabeledSlider(QWidget):
    # Signal: new integer value
    value_changed = Signal(int)

    def __init__(
        self,
        spec: SliderSpec,
        formatter: Callable[[int], str] = str,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.spec = spec
        self.formatter = formatter

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(spec.minimum, spec.maximum)
        self.slider.setSingleStep(spec.step)
        self.slider.setPageStep(spec.step * 10)
        self.slider.setValue(spec.default)
        layout.addWidget(self.slider, stretch=1)

        self.lbl_value = QLabel(formatter(spec.default))
        self.lbl_value.setMinimumWidth(70)
        self.lbl_value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.lbl_value)

        self.slider.valueChanged.connect(self._on_slider_changed)

    def value(self) -> int:
        return self.slider.value()

    def set_value(self, value: float) -> None:
        """Move the slider without emitting value_changed."""
        self.slider.blockSignals(True)
        self.slider.setValue(round(self.spec.clamp(value)))
        self.slider.blockSignals(False)
        self.lbl_value.setText(self.formatter(self.slider.value()))

    def _on_slider_changed(self, value: int) -> None:
        # Snap to the configured step (e.g. distance moves in tens)
        if self.spec.step > 1:
            snapped = self.spec.minimum + round((value - self.spec.minimum) / self.spec.step) * self.spec.step
            if snapped != value:
                self.slider.setValue(snapped)
                return
        self.lbl_value.setText(self.formatter(value))
        self.value_changed.emit(value)
