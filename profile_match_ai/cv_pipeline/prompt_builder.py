"""Prompt sent to the inference endpoint: profile vs. job description, JSON-only answer."""

from typing import Tuple

# Output contract, in the order the model is asked to return them
RESULT_FIELDS: Tuple[str, ...] = ("matches", "gaps", "improvedProfile", "suggestions")

ROLE_FRAMING = (
    "You are a career advisor AI. Analyze the following profile against the job description "
    "and provide a structured response."
)

OUTPUT_CONTRACT = """Please analyze and respond with a JSON object containing:
1. "matches": Array of skills/experiences that align well with the job
2. "gaps": Array of missing skills/experiences needed for the job
3. "improvedProfile": A rewritten profile that addresses the gaps while maintaining authenticity
4. "suggestions": Array of specific actionable suggestions for improvement

Format your response as valid JSON only, no additional text."""


def build_prompt(profile_text: str, job_description: str) -> str:
    """Compose the analysis prompt. Pure: inputs are embedded verbatim, nothing else varies."""
    return (
        f"{ROLE_FRAMING}\n\n"
        f"CURRENT PROFILE:\n{profile_text}\n\n"
        f"TARGET JOB DESCRIPTION:\n{job_description}\n\n"
        f"{OUTPUT_CONTRACT}\n"
    )
