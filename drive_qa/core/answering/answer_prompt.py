"""
Answer generator prompt and fixed replies.

Defines the system instruction and chat prompt template used for grounded
answers, plus the canned replies returned when no completion is attempted.

Dependencies: langchain_core.prompts
System role: Prompt template for document-grounded answers
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

SYSTEM_PROMPT = """You are a helpful AI assistant that answers questions based on the user's cloud drive documents.

## Instructions
1. Use ONLY the provided document excerpts to answer
2. If the answer cannot be found in the documents, say so
3. Provide answers in a clear, concise format
4. For each fact you state, indicate which document it came from

## Conversation History
Earlier turns of the conversation may precede the question. Use them to
understand follow-up questions, not as a source of facts."""

HUMAN_TEMPLATE = """Documents for reference:

{context}

Question: {question}"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history", optional=True),
    ("human", HUMAN_TEMPLATE),
])

EMPTY_QUESTION_MESSAGE = "Please enter a question about your documents."

NO_DOCUMENTS_MESSAGE = (
    "I couldn't find any indexable documents in your drive. "
    "Add some documents and try again."
)

NO_RELEVANT_MESSAGE = (
    "I couldn't find any information relevant to your question in your documents."
)

NO_USABLE_CONTENT_MESSAGE = (
    "I found some matching files, but none of them had readable content I could use "
    "to answer your question."
)

APOLOGY_MESSAGE = (
    "Sorry, I ran into a problem while answering your question. Please try again later."
)
