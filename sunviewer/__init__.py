"""
SunViewer - Hourly Solar Image Archive Browser

Steps through hourly snapshots of an archived solar image tree between the
earliest observation and the latest published hour, across SDO/AIA
wavelengths, the HMI magnetogram and the SOHO/LASCO coronagraph.
"""

__version__ = "1.0.0"
__author__ = "SunViewer Project"
