"""Document parsers: slide decks (raw OOXML) and Word documents (python-docx)."""
