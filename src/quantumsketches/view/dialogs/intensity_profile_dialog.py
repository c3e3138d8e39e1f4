"""Dialog for inspecting the screen intensity profile of the double slit."""
from __future__ import annotations

import csv
import logging
from typing import TYPE_CHECKING

import numpy as np
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter, SVGExporter
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGroupBox, QCheckBox,
    QPushButton, QWidget, QLabel, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt

from quantumsketches.model.colors import wavelength_to_color
from quantumsketches.model.physics import SlitSetup, intensity_profile, profile_components

if TYPE_CHECKING:
    from quantumsketches.model.geometry import ViewportGeometry
    from quantumsketches.model.state import DoubleSlitState


logger = logging.getLogger(__name__)

PROFILE_SAMPLES = 800


class IntensityProfileDialog(QDialog):
    """Plot of the interference term, the diffraction envelope and their product."""

    def __init__(
        self,
        state: DoubleSlitState,
        geometry: ViewportGeometry,
        parent: QWidget | None = None
    ) -> None:
        """Initialize the profile dialog.

        Args:
            state: Double-slit state; read again on every refresh.
            geometry: Canvas geometry the profile is evaluated in.
            parent: Parent widget
        """
        super().__init__(parent)
        self.state = state
        self.geometry = geometry

        self.setWindowTitle("Intensity Profile")
        self.resize(1000, 600)

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        main_layout = QHBoxLayout(self)

        # Left panel: curve selection and export
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_panel.setMaximumWidth(250)

        grp = QGroupBox("Curves")
        grp_layout = QVBoxLayout(grp)
        self.chk_interference = QCheckBox("Two-slit interference")
        self.chk_envelope = QCheckBox("Diffraction envelope")
        self.chk_intensity = QCheckBox("Combined intensity")
        for checkbox in (self.chk_interference, self.chk_envelope, self.chk_intensity):
            checkbox.setChecked(True)
            checkbox.stateChanged.connect(self.refresh)
            grp_layout.addWidget(checkbox)
        left_layout.addWidget(grp)

        self.lbl_params = QLabel("")
        self.lbl_params.setWordWrap(True)
        left_layout.addWidget(self.lbl_params)
        left_layout.addStretch()

        refresh_btn = QPushButton("Refresh")
        refresh_btn.clicked.connect(self.refresh)
        left_layout.addWidget(refresh_btn)

        export_btn = QPushButton("Export as image...")
        export_btn.clicked.connect(self._export_image)
        left_layout.addWidget(export_btn)

        csv_btn = QPushButton("Export as CSV...")
        csv_btn.clicked.connect(self._export_csv)
        left_layout.addWidget(csv_btn)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        left_layout.addWidget(close_btn)

        main_layout.addWidget(left_panel)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setLabel('bottom', 'Position from centre [px]', color='black')
        self.plot_widget.setLabel('left', 'Relative intensity', color='black')
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        self.plot_widget.setYRange(0, 1.05)
        main_layout.addWidget(self.plot_widget, stretch=1)

    def setup(self) -> SlitSetup:
        return SlitSetup.from_state(self.state.params, self.geometry)

    def positions(self, x: np.ndarray) -> np.ndarray:
        """Screen coordinates as base-layout px relative to the centre line."""
        return (x - self.geometry.center_x) / self.geometry.scale_factor

    def refresh(self) -> None:
        """Re-evaluate the profile from the current state and redraw."""
        setup = self.setup()
        params = self.state.params
        color = wavelength_to_color(params.wavelength)
        observed = self.state.observer_active

        self.plot_widget.clear()
        self.plot_widget.addLegend(offset=(10, 10))

        if observed:
            self.plot_widget.setTitle('Particle pattern (observed)', color='black', size='14pt')
            x, intensity = intensity_profile(setup, samples=PROFILE_SAMPLES, observed=True)
            self.plot_widget.plot(self.positions(x), intensity, pen=pg.mkPen(color=color, width=2), name='Which-path bands')
        else:
            self.plot_widget.setTitle('Interference pattern', color='black', size='14pt')
            profile = profile_components(setup, samples=PROFILE_SAMPLES)
            x = self.positions(profile.x)
            if self.chk_interference.isChecked():
                self.plot_widget.plot(x, profile.interference, pen=pg.mkPen(color='#7f7f7f', width=1), name='cos²(φ/2)')
            if self.chk_envelope.isChecked():
                self.plot_widget.plot(
                    x, profile.envelope,
                    pen=pg.mkPen(color='k', width=2, style=Qt.DashLine), name='(sin β / β)²'
                )
            if self.chk_intensity.isChecked():
                self.plot_widget.plot(x, profile.intensity, pen=pg.mkPen(color=color, width=3), name='I(x)')

        for checkbox in (self.chk_interference, self.chk_envelope, self.chk_intensity):
            checkbox.setEnabled(not observed)

        self.lbl_params.setText(
            f"λ = {params.wavelength:.0f} nm\n"
            f"d = {params.slit_separation:.0f} μm\n"
            f"w = {params.slit_width:.0f} μm\n"
            f"Observer: {'on' if observed else 'off'}"
        )

    def _export_image(self) -> None:
        """Export the current plot as an image file."""
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save plot as image",
            "intensity_profile.png",
            "PNG image (*.png);;JPEG image (*.jpg);;SVG vector image (*.svg)"
        )

        if not file_path:
            return

        try:
            if file_path.lower().endswith(".svg"):
                exporter = SVGExporter(self.plot_widget.plotItem)
            else:
                exporter = ImageExporter(self.plot_widget.plotItem)
                exporter.parameters()['width'] = 1920  # High resolution
            exporter.export(file_path)
            logger.info(f"Plot exported to {file_path}")

        except Exception as e:
            logger.exception("Failed to export plot")
            QMessageBox.critical(self, "Export error", f"Could not export the plot:\n{str(e)}")

    def _export_csv(self) -> None:
        """Write the sampled profile (all components) to a CSV file."""
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save profile as CSV", "intensity_profile.csv", "CSV file (*.csv)"
        )
        if not file_path:
            return

        try:
            write_profile_csv(file_path, self.setup(), self.state.observer_active, self.geometry)
            logger.info(f"Profile exported to {file_path}")
        except OSError as e:
            logger.exception("Failed to export profile")
            QMessageBox.critical(self, "Export error", f"Could not write the file:\n{str(e)}")


def write_profile_csv(
    file_path: str,
    setup: SlitSetup,
    observed: bool,
    geometry: ViewportGeometry,
    samples: int = PROFILE_SAMPLES,
) -> None:
    """
    Write one row per sample: position, interference, envelope, intensity.

    In observed mode the interference and envelope columns are left empty.
    """
    with open(file_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["position", "interference", "envelope", "intensity"])
        if observed:
            x, intensity = intensity_profile(setup, samples=samples, observed=True)
            rel = (x - geometry.center_x) / geometry.scale_factor
            for pos, value in zip(rel, intensity):
                writer.writerow([f"{pos:.3f}", "", "", f"{value:.6f}"])
            return

        profile = profile_components(setup, samples=samples)
        rel = (profile.x - geometry.center_x) / geometry.scale_factor
        for row in zip(rel, profile.interference, profile.envelope, profile.intensity):
            writer.writerow([f"{row[0]:.3f}"] + [f"{v:.6f}" for v in row[1:]])
