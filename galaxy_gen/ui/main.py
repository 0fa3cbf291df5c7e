"""GUI application using tkinter."""

import tkinter as tk
from tkinter import ttk, messagebox, colorchooser
from typing import Optional
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from galaxy_gen.params import PARAMETER_RANGES, INTEGER_FIELDS, COLOR_FIELDS
from galaxy_gen.scene import GalaxyScene, Clock
from galaxy_gen.render.points import PointsRenderer
from galaxy_gen.utils.config import Config
from galaxy_gen.utils.reproducibility import create_random_source


PANEL_LABELS = {
    "count": "Count:",
    "size": "Size:",
    "radius": "Radius:",
    "branches": "Branches:",
    "spin": "Spin:",
    "randomness": "Randomness:",
    "randomness_power": "Randomness Power:",
    "inside_color": "Inside Color:",
    "outside_color": "Outside Color:",
}


class GalaxyGUI:
    """Main GUI application: parameter panel beside an orbiting 3D view."""

    def __init__(self, root, config: Optional[Config] = None):
        self.root = root
        self.root.title("Galaxy Generator")
        self.root.geometry("1200x800")
        self.root.configure(background='black')

        self.config = config or Config()
        self.scene = GalaxyScene(
            self.config.galaxy_parameters(),
            rng=create_random_source(self.config.seed)
        )
        self.clock = Clock()
        self.running = True
        self.panel_visible = False
        self.value_vars = {}
        self.value_labels = {}
        self.color_buttons = {}

        self._create_widgets()
        self._setup_layout()

        self.renderer.set_cloud(None, self.scene.current)
        self.scene.add_listener(self.renderer.set_cloud)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self._schedule_tick()

    def _create_widgets(self):
        """Create GUI widgets."""
        # View (matplotlib 3D axes; mouse drag orbits the camera)
        self.figure = Figure(figsize=self.config.figsize, dpi=self.config.dpi)
        self.canvas = FigureCanvasTkAgg(self.figure, master=self.root)
        self.renderer = PointsRenderer(
            figure=self.figure,
            elevation=self.config.elevation,
            azimuth=self.config.azimuth
        )

        # Panel toggle (the panel starts closed)
        self.toggle_button = ttk.Button(self.root, text="Open Controls", command=self.toggle_panel)

        # Control panel
        self.control_frame = ttk.LabelFrame(self.root, text="Galaxy", padding=10)
        params = self.scene.params
        row = 0
        for name, (lo, hi, step) in PARAMETER_RANGES.items():
            ttk.Label(self.control_frame, text=PANEL_LABELS[name]).grid(row=row, column=0, sticky='w', pady=5)
            var = tk.DoubleVar(value=getattr(params, name))
            scale = ttk.Scale(self.control_frame, from_=lo, to=hi, variable=var,
                              orient='horizontal', length=180)
            scale.grid(row=row, column=1, pady=5)
            label = ttk.Label(self.control_frame, text=self._format(name, var.get()), width=8)
            label.grid(row=row, column=2, pady=5)
            scale.configure(command=lambda v, n=name: self._on_drag(n, v))
            # Regenerate on release only, not on every intermediate drag value
            scale.bind('<ButtonRelease-1>', lambda event, n=name: self._commit(n))
            scale.bind('<KeyRelease>', lambda event, n=name: self._commit(n))
            self.value_vars[name] = var
            self.value_labels[name] = label
            row += 1

        for name in COLOR_FIELDS:
            ttk.Label(self.control_frame, text=PANEL_LABELS[name]).grid(row=row, column=0, sticky='w', pady=5)
            button = tk.Button(self.control_frame, width=10, relief='flat',
                               background=getattr(params, name),
                               command=lambda n=name: self._pick_color(n))
            button.grid(row=row, column=1, sticky='w', pady=5)
            self.color_buttons[name] = button
            row += 1

        self.auto_spin_var = tk.BooleanVar(value=self.config.auto_spin)
        ttk.Checkbutton(self.control_frame, text="Animate spin", variable=self.auto_spin_var).grid(
            row=row, column=0, columnspan=2, sticky='w', pady=2)
        row += 1

        self.regenerate_button = ttk.Button(self.control_frame, text="Regenerate", command=self.regenerate)
        self.regenerate_button.grid(row=row, column=0, columnspan=3, pady=10, sticky='ew')
        row += 1

        self.status_label = ttk.Label(self.control_frame, text=self._status_text(), foreground="green")
        self.status_label.grid(row=row, column=0, columnspan=3, pady=10)

    def _setup_layout(self):
        """Setup window layout."""
        self.toggle_button.pack(side='top', anchor='ne', padx=10, pady=5)
        self.canvas.get_tk_widget().pack(side='left', fill='both', expand=True)

    def toggle_panel(self):
        """Show or hide the parameter panel."""
        if self.panel_visible:
            self.control_frame.pack_forget()
            self.toggle_button.config(text="Open Controls")
        else:
            self.control_frame.pack(side='right', fill='y', padx=10, pady=10,
                                    before=self.canvas.get_tk_widget())
            self.toggle_button.config(text="Close Controls")
        self.panel_visible = not self.panel_visible

    @staticmethod
    def _format(name: str, value: float) -> str:
        if name in INTEGER_FIELDS:
            return f"{int(round(value))}"
        step = PARAMETER_RANGES[name][2]
        return f"{value:.3f}" if step < 0.01 else f"{value:.2f}"

    def _status_text(self) -> str:
        return f"{self.scene.current.count} points"

    def _on_drag(self, name: str, value):
        self.value_labels[name].config(text=self._format(name, float(value)))

    def _commit(self, name: str):
        """Commit the slider value of ``name`` and regenerate if it changed."""
        value = self.value_vars[name].get()
        try:
            if self.scene.would_change(name, value):
                self.scene.set_and_regenerate(name, value)
        except Exception as e:
            messagebox.showerror("Error", f"Failed to regenerate: {str(e)}")
        self._sync_controls()

    def _pick_color(self, name: str):
        """Open a color picker for ``name`` and commit the choice."""
        current = getattr(self.scene.params, name)
        _, hex_color = colorchooser.askcolor(color=current, title=PANEL_LABELS[name].rstrip(':'))
        if hex_color is None or not self.scene.would_change(name, hex_color):
            return
        try:
            self.scene.set_and_regenerate(name, hex_color)
        except Exception as e:
            messagebox.showerror("Error", f"Failed to regenerate: {str(e)}")
        self._sync_controls()

    def _sync_controls(self):
        """Show the committed (clamped, snapped) values in the panel."""
        params = self.scene.params
        for name, var in self.value_vars.items():
            value = getattr(params, name)
            var.set(value)
            self.value_labels[name].config(text=self._format(name, value))
        for name, button in self.color_buttons.items():
            button.config(background=getattr(params, name))
        self.status_label.config(text=self._status_text())

    def regenerate(self):
        """Draw a new random sample with the current parameters."""
        try:
            self.scene.regenerate()
        except Exception as e:
            messagebox.showerror("Error", f"Failed to regenerate: {str(e)}")
        self._sync_controls()

    def _schedule_tick(self):
        delay_ms = max(1, int(1000 / max(1, self.config.fps)))
        self.root.after(delay_ms, self._tick)

    def _tick(self):
        """Per-frame update: rotate, optionally animate spin, redraw."""
        if not self.running:
            return
        rotation = self.scene.tick(self.clock.elapsed())
        if self.auto_spin_var.get():
            try:
                if self.scene.advance_spin():
                    self._sync_controls()
            except Exception as e:
                self.auto_spin_var.set(False)
                messagebox.showerror("Error", f"Spin animation stopped: {str(e)}")
        self.renderer.render(rotation)
        self._schedule_tick()

    def close(self):
        """Stop the frame loop and close the window."""
        self.running = False
        self.renderer.close()
        self.root.destroy()


def run_gui(config: Optional[Config] = None):
    """Run GUI application."""
    root = tk.Tk()
    app = GalaxyGUI(root, config)
    root.mainloop()


if __name__ == '__main__':
    run_gui()
