from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool

REVIEW_HEADING = "## Code to review"

REVIEW_TEMPLATE = """You are an experienced software engineer. Please review the code below.

## Code review guidelines

Focus the review on the following areas:

1. **Code quality**
   - Readability and clarity
   - Naming conventions
   - Code structure and organisation

2. **Bugs and potential problems**
   - Logic errors
   - Edge case handling
   - Exception handling

3. **Performance**
   - Algorithmic efficiency
   - Unnecessary work
   - Memory usage

4. **Security**
   - Vulnerabilities
   - Input validation
   - Data protection

5. **Maintainability**
   - Reusability
   - Extensibility
   - Documentation

6. **Best practices**
   - Language-specific idioms
   - Design patterns
   - Testability

{heading}

```
{code}
```

## Review format

Write the review in the following format:

### ✅ Strengths
- [Specific things done well]

### ⚠️ Needs improvement
- [Specific issues and why they matter]

### 🔧 Suggestions
- [Concrete improvements with example code]

### 📝 Overall assessment
[Overall verdict and the highest-priority improvements]"""


def compose_review_prompt(
    code: str, language: str | None = None, focus_areas: list[str] | None = None
) -> str:
    """Fill the review template; language and focus lines go under the code heading."""
    heading = REVIEW_HEADING
    if language:
        heading += f"\n**Language**: {language}\n"
    if focus_areas:
        heading += f"\n**Focus areas**: {', '.join(focus_areas)}\n"
    # format() does not re-scan substituted values, so braces in code are safe
    return REVIEW_TEMPLATE.format(heading=heading, code=code)


class CodeReviewConfig(ToolConfig):
    """Input for the code review prompt tool."""

    code: str = Field(description="Code to review")
    language: str | None = Field(
        default=None, description="Programming language (e.g. typescript, python)"
    )
    focus_areas: list[str] | None = Field(
        default=None,
        alias="focusAreas",
        description='Areas to focus the review on (e.g. ["performance", "security"])',
    )


class CodeReviewPromptTool(BasePlatformTool):
    name: ClassVar[str] = "codeReviewPrompt"
    description: ClassVar[str] = (
        "Combine the given code with a code review prompt template and return the prompt."
    )
    config_model: ClassVar[type[ToolConfig]] = CodeReviewConfig
    output_description: ClassVar[str | None] = "Code review prompt"
    failure_message: ClassVar[str] = "Failed to build the review prompt"

    async def execute(self, config: CodeReviewConfig) -> ToolResponse:
        return ToolResponse.text(
            compose_review_prompt(config.code, config.language, config.focus_areas)
        )
