class TicTacToeError(Exception):
    pass


class InvalidBoardSizeError(TicTacToeError, ValueError):
    pass
