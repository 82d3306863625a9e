"""Contact import from the directory into a mailbox."""
