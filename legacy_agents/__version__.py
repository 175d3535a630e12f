"""Version information for Legacy Agents."""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Release information
__organization__ = "GFZ Data Services, GFZ Helmholtz Centre for Geosciences"
__license__ = "GNU General Public License v3.0"
__description__ = "Legacy contributor resolution for the SUMARIOPMD metadata database"
