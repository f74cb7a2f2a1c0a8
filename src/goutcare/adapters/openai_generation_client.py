"""OpenAI Responses API client for meal analysis and advice."""

from dataclasses import dataclass

from openai import APIError, APIStatusError, AsyncOpenAI

from goutcare.domain.errors import AnalysisUnavailableError, MalformedResponseError
from goutcare.services.analysis import GenerationClient


@dataclass
class OpenAIGenerationClient(GenerationClient):
    """Generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIGenerationClient":
        """Create an OpenAI client that never retries on its own."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None = None,
        schema: dict[str, object] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Call OpenAI Responses API, with structured outputs when a schema is given."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [{"role": "user", "content": content}],
            "store": store,
        }
        if schema is not None:
            request_payload["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": schema_name or "structured_output",
                    "strict": True,
                    "schema": schema,
                }
            }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except APIStatusError as exc:
            raise AnalysisUnavailableError(
                f"OpenAI request failed with status {exc.status_code}",
                status_code=exc.status_code,
            ) from exc
        except APIError as exc:
            raise AnalysisUnavailableError(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise MalformedResponseError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
