def tokenize(line):
    """
    Split a command line on runs of whitespace.
    No quoting or escaping: a blank line gives an empty list.
    Returns: list of tokens
    """
    if not line:
        return []
    return line.split()
