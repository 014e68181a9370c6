# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Evaluation and export of phase center variation grids.

Grids are tabulated in zenith angle for receiver antennas and in nadir
angle for satellite antennas; the functions below take either as
``zenith``. Values are millimetres.
"""

import logging
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd
from scipy.interpolate import RegularGridInterpolator

from ..core.data_structures import AntennaRecord, PCVGrid

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


def _azimuth_table(grid: PCVGrid):
    """Azimuth rows sorted and closed over the 0/360 seam.

    A repeated azimuth keeps its first row.
    """
    azimuths, first = np.unique(grid.azimuths, return_index=True)
    matrix = grid.azimuth_matrix[first]

    if azimuths[-1] < azimuths[0] + 360.0:
        azimuths = np.append(azimuths, azimuths[0] + 360.0)
        matrix = np.vstack([matrix, matrix[0]])
    if azimuths[0] > 0.0:
        azimuths = np.insert(azimuths, 0, azimuths[-2] - 360.0)
        matrix = np.vstack([matrix[-2], matrix])
    return azimuths, matrix


def interpolate_pcv(grid: PCVGrid, zenith: ArrayLike,
                    azimuth: Optional[ArrayLike] = None) -> ArrayLike:
    """
    Interpolate the phase center variation at a direction

    Parameters:
    -----------
    grid : PCVGrid
        Grid of one frequency
    zenith : float or np.ndarray
        Zenith (nadir for satellite antennas) angle in degrees; values
        outside the grid are clamped to its edge
    azimuth : float or np.ndarray, optional
        Azimuth in degrees. When omitted, or when the grid has no azimuth
        rows, the NOAZI row is used.

    Returns:
    --------
    float or np.ndarray
        PCV in millimetres
    """
    zeniths = grid.zeniths
    z = np.clip(np.asarray(zenith, dtype=np.float64), zeniths[0], zeniths[-1])

    if azimuth is None or not grid.azimuth_values:
        result = np.interp(z, zeniths, grid.non_azimuth_values)
    else:
        azimuths, matrix = _azimuth_table(grid)
        a = np.mod(np.asarray(azimuth, dtype=np.float64), 360.0)
        a, z = np.broadcast_arrays(a, z)
        interpolator = RegularGridInterpolator((azimuths, zeniths), matrix, method="linear")
        points = np.stack([a, z], axis=-1).reshape(-1, 2)
        result = interpolator(points).reshape(a.shape)

    return float(result) if np.ndim(result) == 0 else result


def line_of_sight_enu(zenith: ArrayLike, azimuth: ArrayLike) -> np.ndarray:
    """Unit vector (north, east, up) towards a direction given in degrees"""
    z = np.radians(np.asarray(zenith, dtype=np.float64))
    a = np.radians(np.asarray(azimuth, dtype=np.float64))
    return np.stack([np.sin(z) * np.cos(a), np.sin(z) * np.sin(a), np.cos(z)], axis=-1)


def phase_center_correction(grid: PCVGrid, zenith: ArrayLike,
                            azimuth: Optional[ArrayLike] = None) -> ArrayLike:
    """Range correction in millimetres: PCV minus the PCO projected on the line of sight.

    Without ``azimuth`` only the up component of the offset is used.
    """
    pcv = interpolate_pcv(grid, zenith, azimuth)
    if grid.phase_center_offset is None:
        return pcv

    pco = grid.phase_center_offset.as_array()
    if azimuth is None:
        projected = pco[2] * np.cos(np.radians(np.asarray(zenith, dtype=np.float64)))
    else:
        projected = line_of_sight_enu(zenith, azimuth) @ pco
    correction = pcv - projected
    return float(correction) if np.ndim(correction) == 0 else correction


def _antenna_name(antenna: AntennaRecord) -> str:
    if antenna.is_satellite:
        return antenna.identifier1
    if antenna.identifier1:
        return f"{antenna.type} {antenna.identifier1}"
    return antenna.type


def grid_to_dataframe(grid: PCVGrid, antenna: Optional[str] = None) -> pd.DataFrame:
    """
    Flatten a grid into long format

    Returns:
    --------
    pd.DataFrame
        Columns antenna, frequency, azimuth (NaN for the NOAZI row),
        zenith, value
    """
    zeniths = grid.zeniths
    frames = [pd.DataFrame({
        'azimuth': np.nan,
        'zenith': zeniths,
        'value': grid.non_azimuth_values,
    })]
    for azimuth, values in grid.azimuth_values:
        frames.append(pd.DataFrame({'azimuth': azimuth, 'zenith': zeniths, 'value': values}))

    df = pd.concat(frames, ignore_index=True)
    df.insert(0, 'frequency', grid.frequency_code)
    df.insert(0, 'antenna', antenna)
    return df


def antennas_to_dataframe(antennas: Iterable[AntennaRecord]) -> pd.DataFrame:
    """Long format PCV table of several antennas, see :func:`grid_to_dataframe`"""
    frames = [grid_to_dataframe(grid, _antenna_name(ant))
              for ant in antennas for grid in ant.pcv_grids]
    if not frames:
        return pd.DataFrame(columns=['antenna', 'frequency', 'azimuth', 'zenith', 'value'])
    return pd.concat(frames, ignore_index=True)


def offsets_to_dataframe(antennas: Iterable[AntennaRecord]) -> pd.DataFrame:
    """One row per antenna and frequency with the phase center offset (mm)"""
    rows = []
    for ant in antennas:
        for grid in ant.pcv_grids:
            pco = grid.phase_center_offset
            rows.append({
                'antenna': _antenna_name(ant),
                'satellite': ant.is_satellite,
                'frequency': grid.frequency_code,
                'north': pco.north if pco else np.nan,
                'east': pco.east if pco else np.nan,
                'up': pco.up if pco else np.nan,
                'valid_from': ant.valid_from,
                'valid_until': ant.valid_until,
            })
    logger.debug("offset table with %d rows", len(rows))
    return pd.DataFrame(rows, columns=['antenna', 'satellite', 'frequency', 'north', 'east',
                                       'up', 'valid_from', 'valid_until'])
