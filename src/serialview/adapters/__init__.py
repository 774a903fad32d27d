"""Host adapters for the serial viewer."""
