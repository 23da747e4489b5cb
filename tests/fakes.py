from langchain_core.outputs import Generation, LLMResult


class FakeCompletionLLM:
    """Stands in for the completion model: records prompts, answers with a fixed text or raises."""

    def __init__(self, text="A short, simple summary.", error=None, logprobs=None):
        self.text = text
        self.logprobs = logprobs
        self.error = error
        self.prompts = []

    async def agenerate(self, prompts):
        self.prompts.extend(prompts)
        if self.error is not None:
            raise self.error
        return LLMResult(
            generations=[[Generation(text=self.text, generation_info={"finish_reason": "stop", "logprobs": self.logprobs})]],
            llm_output={"model_name": "gpt-3.5-turbo-instruct", "token_usage": {"total_tokens": 42}},
        )
