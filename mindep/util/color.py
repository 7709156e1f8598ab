# This is an ANSI escape code for green color.
GREEN = "\033[92m"
# This is an ANSI escape code for red color.
RED = "\033[91m"
# This is an ANSI escape code for bold text.
BOLD = "\033[1m"
# This is an ANSI escape code to end formatting.
END = "\033[0m"


def get_dependency_text(text: str) -> str:
    """
    Returns the dependency text with bold and green color in the terminal.

    :param text: The text to be formatted.

    :return: The formatted text.
    """
    return f"{GREEN}{BOLD}{text}{END}"


def get_failure_text(text: str) -> str:
    """
    Returns the failure text with red color in the terminal.

    :param text: The text to be formatted.

    :return: The formatted text.
    """
    return f"{RED}{text}{END}"
