# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel


class DailyInsightRequest(BaseModel):
    """Requête de reflet quotidien.

    Les champs sont optionnels au niveau du schéma: leur absence est signalée par
    l'orchestrateur avec le code `INVALID_ARGUMENT`, pas par une erreur 422.

    Champs:
    - timeZoneId: str (fuseau IANA, ex. America/Los_Angeles)
    - localDate: str (YYYY-MM-DD)
    """

    timeZoneId: str | None = None
    localDate: str | None = None


class DailyInsightResponse(BaseModel):
    """Reflet quotidien renvoyé au client.

    Champs:
    - localDate, timeZoneId: clé de la requête
    - dayElement, elementTheme, heavenlyStem, earthlyBranch: pilier du jour
    - insightText: texte généré
    - generatedAt: int (millisecondes Unix de la génération d'origine)
    - version: str
    """

    localDate: str
    timeZoneId: str
    dayElement: str
    elementTheme: str
    heavenlyStem: str
    earthlyBranch: str
    insightText: str
    generatedAt: int
    version: str
