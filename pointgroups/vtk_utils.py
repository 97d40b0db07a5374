#!/usr/bin/env python3
"""
VTK Display Utilities

Environment setup and plotter cleanup for showing point groups with PyVista,
so an interactive window never leaves render resources behind.
"""

import gc
import logging
import os
import sys
from typing import List, Optional, Sequence

import pyvista as pv


logger = logging.getLogger(__name__)


class VTKSafetyManager:
    """Environment setup and plotter cleanup."""

    _environment_initialized = False

    @classmethod
    def setup_vtk_environment(cls, force_reinit: bool = False) -> None:
        """
        Set up VTK environment variables for cross-platform stability.

        Args:
            force_reinit: Force re-initialization even if already initialized
        """
        if cls._environment_initialized and not force_reinit:
            return

        vtk_env_vars = {
            'VTK_RENDER_WINDOW_MAIN_THREAD': '1',
            'VTK_USE_COCOA': '1' if sys.platform == "darwin" else '0',
            'VTK_SILENCE_GET_VOID_POINTER_WARNINGS': '1',
            'VTK_DEBUG_LEAKS': '0',
        }
        for key, value in vtk_env_vars.items():
            os.environ.setdefault(key, value)

        cls._environment_initialized = True

    @staticmethod
    def cleanup_plotter(plotter: Optional[pv.Plotter]) -> None:
        """Close a plotter and release its render window."""
        if plotter is None:
            return
        try:
            plotter.close()
        except Exception as e:
            logger.warning(f"Could not close plotter: {e}")
        finally:
            gc.collect()


def show_point_groups(groups: Sequence[pv.PolyData], title: str = "Point Cloud",
                      point_size: float = 2.0, window_size: tuple = (1280, 800),
                      off_screen: bool = False,
                      screenshot: Optional[str] = None) -> Optional[List]:
    """
    Render point groups coloured by their stored RGB values.

    Args:
        groups: PolyData point groups to draw
        title: Window title
        point_size: Rendered point size
        window_size: Window size in pixels
        off_screen: Render without opening a window
        screenshot: Optional path of an image to save

    Returns:
        The screenshot image array when off_screen, otherwise None
    """
    VTKSafetyManager.setup_vtk_environment()

    plotter = pv.Plotter(window_size=window_size, off_screen=off_screen)
    try:
        plotter.set_background("black")
        for group in groups:
            if group.n_points == 0:
                continue
            plotter.add_mesh(group, scalars="RGB", rgb=True,
                             point_size=point_size, render_points_as_spheres=False)
        plotter.add_axes()
        plotter.add_title(title)
        return plotter.show(screenshot=screenshot, auto_close=False,
                            return_img=off_screen)
    finally:
        VTKSafetyManager.cleanup_plotter(plotter)
