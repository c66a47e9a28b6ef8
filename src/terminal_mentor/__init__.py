"""Terminal Mentor: an interactive terminal for practicing cybersecurity."""
