"""ByteShell - a small raw-mode interactive shell."""
