"""Process-wide services shared by the chord engine."""
