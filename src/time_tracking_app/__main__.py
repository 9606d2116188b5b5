import logging

from textual.logging import TextualHandler

from .UI import TimeTrackingApp

def main() -> None:
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    TimeTrackingApp().run()

if __name__ == "__main__":
    main()
