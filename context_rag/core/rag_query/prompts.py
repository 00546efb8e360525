"""
Answer synthesis and follow-up prompts.

Defines the system instructions and chat templates used by the
AnswerSynthesizer.

Dependencies: langchain_core.prompts
System role: Prompt templates for answer generation
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = (
    "You are a helpful assistant for treatment plant operations. "
    "Answer questions concisely based only on the provided documents. "
    "If the documents do not contain the answer, say so. "
    "Keep responses brief and specific."
)

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Based on this document content, answer briefly:

{context}

Question: {question}"""),
])

FOLLOW_UP_SYSTEM_PROMPT = (
    "You generate relevant follow-up questions based on previous conversation context."
)

FOLLOW_UP_PROMPT = ChatPromptTemplate.from_messages([
    ("system", FOLLOW_UP_SYSTEM_PROMPT),
    ("human", """Based on the following question and answer, suggest {count} relevant follow-up questions that the user might want to ask next.
Return ONLY a JSON array of strings, with each string being a suggested question. Do not include any explanations or other text.

Original Question: {question}

Answer: {answer}"""),
])


def render(prompt: ChatPromptTemplate, **values: object) -> tuple[str, str]:
    """
    Render a system + human template into plain strings.

    Args:
        prompt: Two-message chat template
        **values: Template variables

    Returns:
        tuple[str, str]: (system prompt, user prompt)
    """
    system, human = prompt.format_messages(**values)
    return str(system.content), str(human.content)
