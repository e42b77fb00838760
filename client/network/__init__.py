"""Server communication."""
