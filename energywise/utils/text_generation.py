# energywise/utils/text_generation.py
"""
Text generators that phrase a savings suggestion.

Both take a SuggestionRequest and return a SavingsSuggestion, raising
GenerationFailed when they cannot produce one. The savings advisor decides
applicability before calling them.
"""
import json
import logging

import requests

from energywise.errors import GenerationFailed
from energywise.utils.recommendations import (
    SavingsSuggestion,
    estimate_savings,
    is_applicable,
)

logger = logging.getLogger(__name__)

SUGGESTION_TEMPLATE = (
    "Se você usar este aparelho 1 hora a menos por dia, poderá economizar "
    "aproximadamente {kwh} kWh por mês, o que equivale a cerca de {reais} reais na sua conta."
)

PROMPT = """
Você é um especialista em eficiência energética. Analise os dados de uso do aparelho fornecidos e sugira possíveis economias de energia em português brasileiro.

Nome do Aparelho: {applianceName}
Consumo de Energia (W): {power}
Uso Diário (Horas): {dailyUsageHours}
Custo por kWh (R$): {costPerKWh}

Sua tarefa é avaliar se reduzir o tempo de uso do aparelho em 1 hora por dia resultaria em uma economia de custos significativa para o usuário.

Se a economia mensal (considerando 30 dias) for de pelo menos R$1,00, crie uma sugestão clara e acionável.
A sugestão deve seguir este formato EXATO:
"Se você usar este aparelho 1 hora a menos por dia, poderá economizar aproximadamente X kWh por mês, o que equivale a cerca de Y reais na sua conta."
Substitua X pelo cálculo de economia de kWh mensal e Y pelo cálculo de economia em R$ mensal. Arredonde os valores para duas casas decimais.

Se a economia mensal for inferior a R$1,00, ou se o uso diário já for 1 hora ou menos, considere a sugestão não aplicável.
Nesse caso, defina 'applicable' como false e 'suggestion' como uma string vazia.

Caso contrário, defina 'applicable' como true.

Responda apenas com um objeto JSON com os campos 'suggestion' e 'applicable'. Seja conciso e direto ao ponto.
"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestion": {"type": "STRING"},
        "applicable": {"type": "BOOLEAN"},
    },
    "required": ["suggestion", "applicable"],
}


def _two_decimals(value):
    return f"{value:.2f}".replace(".", ",")


class SuggestionGenerator:
    def generate(self, request):
        raise NotImplementedError


class TemplateSuggestionGenerator(SuggestionGenerator):
    """Fills the fixed sentence locally, no network call."""

    def generate(self, request):
        estimate = estimate_savings(request.power, request.cost_per_kwh)
        if not is_applicable(request.daily_usage_hours, estimate):
            return SavingsSuggestion(suggestion="", applicable=False)
        text = SUGGESTION_TEMPLATE.format(
            kwh=_two_decimals(estimate.monthly_kwh),
            reais=_two_decimals(estimate.monthly_cost),
        )
        return SavingsSuggestion(suggestion=text, applicable=True)


class GeminiSuggestionGenerator(SuggestionGenerator):
    """
    Calls the Google Generative Language generateContent endpoint with the
    suggestion prompt and reads back a JSON {suggestion, applicable} object.
    One attempt, no retry.
    """

    def __init__(self, api_url, api_key, model, timeout=30):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def endpoint(self):
        return f"{self.api_url}/models/{self.model}:generateContent"

    def build_payload(self, request):
        return {
            "contents": [
                {"role": "user", "parts": [{"text": PROMPT.format(**request.to_dict())}]}
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def generate(self, request):
        if not self.api_key:
            raise GenerationFailed("SUGGESTION_API_KEY is not configured")

        try:
            response = requests.post(
                self.endpoint,
                json=self.build_payload(request),
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise GenerationFailed(f"text generator request failed: {e}") from e
        except ValueError as e:
            raise GenerationFailed("text generator returned invalid JSON") from e

        return self.parse_output(body)

    @staticmethod
    def parse_output(body):
        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
            output = json.loads(text)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GenerationFailed("text generator returned no output") from e

        if not isinstance(output, dict):
            raise GenerationFailed("text generator output is not an object")
        suggestion = output.get("suggestion")
        applicable = output.get("applicable")
        if not isinstance(suggestion, str) or not isinstance(applicable, bool):
            raise GenerationFailed("text generator output is missing suggestion/applicable")
        return SavingsSuggestion(suggestion=suggestion, applicable=applicable)


def build_generator(config):
    backend = config.get("SUGGESTION_BACKEND", "gemini")
    if backend == "template":
        return TemplateSuggestionGenerator()
    if backend == "gemini":
        return GeminiSuggestionGenerator(
            api_url=config["SUGGESTION_API_URL"],
            api_key=config.get("SUGGESTION_API_KEY"),
            model=config["SUGGESTION_MODEL"],
            timeout=config.get("SUGGESTION_TIMEOUT", 30),
        )
    raise ValueError(f"Unknown SUGGESTION_BACKEND: {backend}")
