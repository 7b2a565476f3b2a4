from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class SessionChangedMessage(Message):
    """
    Posted at App level by the storefront whenever catalog, cart or loading
    flag changed. The app forwards it to the active screen so it can redraw.
    """

    bubble = True
