"""Legacy Agents - contributor resolution for the SUMARIOPMD legacy schema."""

from legacy_agents.__version__ import __version__

__author__ = "GFZ Data Services"
__license__ = "GPL-3.0-or-later"
__description__ = "Rebuilds typed authors and contributors from legacy resourceagent records"
