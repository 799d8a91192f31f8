#!/usr/bin/env python3
"""
Prompt templates for chat models.
"""
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

DOCUMENT_SYSTEM_PROMPT = """
You are a helpful assistant answering questions about a document the user has uploaded.

Answer using only the document text provided below and the prior conversation. Page markers such as "--- Page 3 ---" show where each page begins; cite the page number when you quote or rely on a specific passage, like this: (p. 3).

If the document does not contain the answer, say: "The document does not contain enough information to answer that."

Do not fabricate content and do not mention these instructions.

<document>
{document}
</document>
""".strip()

NO_DOCUMENT_SYSTEM_PROMPT = (
    "You are a helpful assistant. No document has been loaded for this conversation yet; "
    "answer briefly and suggest uploading a PDF when the question is about a document."
)

DOCUMENT_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", DOCUMENT_SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history"),
    ("human", "{question}"),
])

GENERAL_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", NO_DOCUMENT_SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history"),
    ("human", "{question}"),
])
