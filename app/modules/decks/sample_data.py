"""Demo decks a user can load to try the app with realistic content."""

from __future__ import annotations

from pydantic import BaseModel

from app.modules.ai_generation.models import GeneratedCard


class SampleDeck(BaseModel):
    title: str
    description: str
    cards: list[GeneratedCard]


def _cards(pairs: list[tuple[str, str]]) -> list[GeneratedCard]:
    return [GeneratedCard(front=front, back=back) for front, back in pairs]


ENGLISH_SPANISH = SampleDeck(
    title="English to Spanish Vocabulary",
    description="Learn essential Spanish words and phrases from English",
    cards=_cards(
        [
            ("Hello", "Hola"),
            ("Goodbye", "Adiós"),
            ("Please", "Por favor"),
            ("Thank you", "Gracias"),
            ("Yes", "Sí"),
            ("No", "No"),
            ("Good morning", "Buenos días"),
            ("Good afternoon", "Buenas tardes"),
            ("Good night", "Buenas noches"),
            ("How are you?", "¿Cómo estás?"),
            ("I am fine", "Estoy bien"),
            ("What is your name?", "¿Cómo te llamas?"),
            ("My name is...", "Me llamo..."),
            ("Water", "Agua"),
            ("Food", "Comida"),
            ("House", "Casa"),
            ("Family", "Familia"),
            ("Friend", "Amigo/Amiga"),
            ("Love", "Amor"),
            ("Time", "Tiempo"),
        ]
    ),
)

FRENCH_HISTORY = SampleDeck(
    title="French History Quiz",
    description="Essential questions and answers about the history of France",
    cards=_cards(
        [
            (
                "When did the French Revolution begin?",
                "1789, with the storming of the Bastille on July 14",
            ),
            (
                "Who was the Sun King?",
                "Louis XIV (14th), who ruled France from 1643 to 1715",
            ),
            (
                "What was the Hundred Years' War?",
                "A series of conflicts between France and England from 1337 to 1453",
            ),
            (
                "Who was Joan of Arc?",
                "A peasant girl who led French forces during the Hundred Years' War "
                "and was later canonized as a saint",
            ),
            (
                "When did Napoleon Bonaparte crown himself Emperor?",
                "December 2, 1804, at Notre-Dame Cathedral in Paris",
            ),
            (
                "What was the Reign of Terror?",
                "A period during the French Revolution (1793-1794) marked by mass "
                "executions of perceived enemies",
            ),
            (
                "Who was Charlemagne?",
                "King of the Franks who united much of Western Europe and was crowned "
                "Holy Roman Emperor in 800 AD",
            ),
            (
                "When did France become a republic for the first time?",
                "September 22, 1792, after the abolition of the monarchy",
            ),
            (
                "What was the Treaty of Versailles?",
                "The peace treaty signed in 1919 that ended World War I, signed at "
                "the Palace of Versailles",
            ),
            (
                "Who was Cardinal Richelieu?",
                "Chief minister to Louis XIII who strengthened royal power and French "
                "influence in the 17th century",
            ),
            (
                "When did the Fifth Republic of France begin?",
                "1958, with Charles de Gaulle as its first president",
            ),
            (
                "What was the Estates-General?",
                "An assembly representing the three estates of French society: "
                "clergy, nobility, and commoners",
            ),
            (
                "Who was Napoleon III?",
                "Napoleon Bonaparte's nephew who became the first president of France "
                "and later its last monarch (1852-1870)",
            ),
            (
                "When did France abolish slavery?",
                "First in 1794 during the Revolution, then definitively in 1848",
            ),
            (
                "What was the Paris Commune?",
                "A revolutionary socialist government that ruled Paris from March to "
                "May 1871",
            ),
            (
                "Who was Clovis I?",
                "The first king of the Franks to unite all Frankish tribes under one "
                "ruler (circa 481-511 AD)",
            ),
            (
                "When did France surrender to Nazi Germany in WWII?",
                "June 22, 1940, leading to the division between occupied and Vichy "
                "France",
            ),
            (
                "What was the Edict of Nantes?",
                "A decree issued by Henry IV in 1598 granting religious tolerance to "
                "Protestants",
            ),
            (
                "Who were the Jacobins?",
                "The most radical political club during the French Revolution, led by "
                "Robespierre",
            ),
            (
                "When was the guillotine last used in France?",
                "September 10, 1977; capital punishment was abolished in France in 1981",
            ),
        ]
    ),
)

SAMPLE_DECKS: tuple[SampleDeck, ...] = (ENGLISH_SPANISH, FRENCH_HISTORY)
