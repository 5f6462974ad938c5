"""KMP Scaffold -- Kotlin mobile multiplatform module generator."""

__version__ = "0.1.0"
