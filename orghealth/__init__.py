"""orghealth - technical and financial health scoring for CRM organizations."""

__version__ = "0.1.0"
