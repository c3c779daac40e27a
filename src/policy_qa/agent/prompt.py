"""Response templates and prompts for the HR policy assistant."""

POLICY_MATCH_TEMPLATE = "Based on our **{title}** policy:\n\n{excerpt}..."

ESCALATION_TEMPLATE = """I understand you're looking for information about "{query}". 

I wasn't able to find a specific policy that addresses your question in our current knowledge base. For the most accurate and up-to-date information, I'd recommend reaching out to our HR team directly.

You can contact HR at: {hr_email}

They'll be happy to provide you with detailed guidance and ensure you get the specific information you need.

Is there anything else I can help you with regarding our existing policies?"""

ERROR_MESSAGE = (
    "I apologize, but I encountered an issue processing your request. "
    "Please try again or contact HR directly at {hr_email}."
)

COMPOSITION_SYSTEM_PROMPT = "You are an HR chatbot assistant. You answer employee questions using company policies only."

COMPOSITION_PROMPT = """Based on the following company policies, answer the user's question in a helpful and professional manner.

User Question: "{query}"

Relevant Policies:
{policy_context}

Instructions:
- Use a warm, professional, and empathetic tone
- Provide specific policy details when relevant
- If the policies don't fully answer the question, acknowledge this
- Keep responses concise but comprehensive
- Always cite which policy you're referencing
- If multiple policies apply, explain how they work together

Response:"""
