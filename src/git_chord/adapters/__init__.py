"""Host adapters that embed the chord engine in other surfaces."""
