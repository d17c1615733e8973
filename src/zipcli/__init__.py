"""Command-line archiver that packages files and directories into ZIP archives."""
