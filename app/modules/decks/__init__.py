from .sample_data import ENGLISH_SPANISH, FRENCH_HISTORY, SAMPLE_DECKS, SampleDeck

__all__ = ["ENGLISH_SPANISH", "FRENCH_HISTORY", "SAMPLE_DECKS", "SampleDeck"]
