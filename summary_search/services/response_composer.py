"""
Response Composer
Turns ranked results and the query intent into a conversational answer
with follow-up suggestions
"""
import random
from collections import Counter
from typing import List, Optional, Tuple
from summary_search.models.query import SearchQuery, IntentType, DateRange
from summary_search.models.responses import SearchResult, ConversationalResponse
from summary_search.models.summary import SummaryRecord
from summary_search.config import settings
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# FIXED TEXT
# =============================================================================

NO_RESULTS_ANSWER = (
    "I couldn't find any summaries matching your query. "
    "Try asking about recent meetings or specific topics you've discussed."
)

FALLBACK_ANSWER = "I'm sorry, I couldn't process your search. Please try rephrasing your question."

CLARIFICATION_PROMPT = "What would you like to find in your summaries?"

EXAMPLE_QUERIES: Tuple[str, ...] = (
    "What did we decide about the product roadmap last Monday?",
    "Who was assigned to work on the API integration?",
    "Show me all decisions made in engineering meetings this week",
    "What action items came out of the client meeting?",
    "Summarize discussions about budget planning",
    "When did we last talk about hiring?",
    "What were the key takeaways from the retrospective?",
    "Find meetings where Sarah mentioned the deadline",
)

# Follow-up pool, keyed by the intent each question leads to
FOLLOWUP_QUESTIONS: Tuple[Tuple[IntentType, str], ...] = (
    (IntentType.FIND_ACTION_ITEMS, "What action items came from these meetings?"),
    (IntentType.FIND_PARTICIPANTS, "Who else was involved in these discussions?"),
    (IntentType.FIND_TIMEFRAME, "When was this topic last discussed?"),
    (IntentType.FIND_DECISIONS, "What decisions were made about this?"),
)

DECISION_KEYWORDS = ("decided", "agreed", "concluded")
ACTION_KEYWORDS = ("will", "should", "next steps")

MAX_EXTRACTED_SENTENCES = 3
TOPIC_PREVIEW_LENGTH = 200
DEFAULT_PREVIEW_LENGTH = 150
FOLLOWUP_COUNT = 3
SUGGESTION_COUNT = 4


# =============================================================================
# MAIN COMPOSITION
# =============================================================================

def compose_response(
    query: SearchQuery,
    results: List[SearchResult],
    time_window: Optional[DateRange] = None
) -> ConversationalResponse:
    """
    Build the conversational response for ranked results

    Args:
        query: Parsed search query
        results: Ranked results (descending relevance)
        time_window: Date window to show alongside the answer

    Returns:
        ConversationalResponse with at most settings.max_results results
    """
    if not results:
        return no_results_response(time_window)

    answer = generate_contextual_answer(query, results)

    logger.debug(f"Composed {query.intent.type.value} answer from {len(results)} results")

    return ConversationalResponse(
        answer=answer,
        results=results[:settings.max_results],
        suggested_questions=generate_followup_questions(query),
        confidence=results[0].relevance_score,
        time_window=time_window
    )


def no_results_response(time_window: Optional[DateRange] = None) -> ConversationalResponse:
    """Valid, non-error response when nothing matched"""
    return ConversationalResponse(
        answer=NO_RESULTS_ANSWER,
        results=[],
        suggested_questions=get_generic_suggestions(),
        confidence=0.0,
        time_window=time_window
    )


def fallback_response() -> ConversationalResponse:
    """Response returned when the search itself failed"""
    return ConversationalResponse(
        answer=FALLBACK_ANSWER,
        results=[],
        suggested_questions=get_random_suggestions(),
        confidence=0.0
    )


# =============================================================================
# ANSWER TEMPLATES
# =============================================================================

def generate_contextual_answer(query: SearchQuery, results: List[SearchResult]) -> str:
    """
    Phrase the answer according to the query intent

    Args:
        query: Parsed search query
        results: Ranked results, non-empty

    Returns:
        Answer text
    """
    top_result = results[0]
    intent = query.intent.type

    if intent == IntentType.FIND_DECISIONS:
        decisions = extract_sentences(results, DECISION_KEYWORDS)
        if decisions:
            return f"Based on your summaries, here are the key decisions I found: {decisions}"

    elif intent == IntentType.FIND_ACTION_ITEMS:
        action_items = extract_sentences(results, ACTION_KEYWORDS)
        if action_items:
            return f"I found these action items from your meetings: {action_items}"

    elif intent == IntentType.FIND_PARTICIPANTS:
        participants = collect_participants(results)
        if participants:
            return f"The following people participated in relevant meetings: {', '.join(participants)}"

    elif intent == IntentType.SUMMARIZE_TOPIC:
        return f"Here's what I found about that topic: {top_result.content[:TOPIC_PREVIEW_LENGTH]}..."

    # find_content, find_timeframe, or nothing extractable for the intent
    noun = "summaries" if len(results) > 1 else "summary"
    return (
        f"I found {len(results)} relevant {noun} for your query. "
        f"The most relevant one discusses: {top_result.content[:DEFAULT_PREVIEW_LENGTH]}..."
    )


def extract_sentences(results: List[SearchResult], keywords: Tuple[str, ...]) -> str:
    """
    Pull keyword-bearing sentences out of result content

    Sentences are split on "." and matched case-insensitively; at most
    three are kept across all results, in rank order.

    Returns:
        Sentences joined with ". " and terminated by ".", or "" if none
    """
    sentences = []
    for result in results:
        for sentence in result.content.split("."):
            sentence = sentence.strip()
            if sentence and any(keyword in sentence.lower() for keyword in keywords):
                sentences.append(sentence)

    if not sentences:
        return ""

    return ". ".join(sentences[:MAX_EXTRACTED_SENTENCES]) + "."


def collect_participants(results: List[SearchResult]) -> List[str]:
    """Order-preserving union of participants across results"""
    return list(dict.fromkeys(
        participant
        for result in results
        for participant in result.metadata.participants
    ))


# =============================================================================
# SUGGESTIONS
# =============================================================================

def generate_followup_questions(query: SearchQuery) -> List[str]:
    """Static follow-ups, skipping the one that repeats the current intent"""
    candidates = [
        question for intent, question in FOLLOWUP_QUESTIONS
        if intent != query.intent.type
    ]
    return candidates[:FOLLOWUP_COUNT]


def get_generic_suggestions() -> List[str]:
    """First example queries, stable across calls"""
    return list(EXAMPLE_QUERIES[:SUGGESTION_COUNT])


def get_random_suggestions(rng: Optional[random.Random] = None) -> List[str]:
    """Distinct example queries in random order"""
    rng = rng or random
    return rng.sample(list(EXAMPLE_QUERIES), SUGGESTION_COUNT)


def extract_common_topics(summaries: List[SummaryRecord], limit: int = 3) -> List[str]:
    """Most frequent tags; ties keep first-seen order"""
    tag_counts = Counter(tag for summary in summaries for tag in summary.tags)
    return [tag for tag, _ in tag_counts.most_common(limit)]


def extract_recent_participants(
    summaries: List[SummaryRecord],
    window: Optional[int] = None,
    limit: int = 3
) -> List[str]:
    """Distinct participants from the most recent summaries"""
    if window is None:
        window = settings.recent_summary_window

    recent = sorted(summaries, key=lambda s: s.date, reverse=True)[:window]
    participants = dict.fromkeys(
        participant
        for summary in recent
        for participant in summary.participants
    )
    return list(participants)[:limit]


def generate_personalized_suggestions(summaries: List[SummaryRecord]) -> List[str]:
    """
    Build suggestions from the user's own tags and colleagues

    Args:
        summaries: User's summary corpus

    Returns:
        Four suggestions; generic example queries fill any gaps
    """
    topics = extract_common_topics(summaries)
    participants = extract_recent_participants(summaries)

    suggestions = []
    if topics:
        suggestions.append(f"What did we decide about {topics[0]}?")
    if participants:
        suggestions.append(f"Show me recent meetings with {participants[0]}")
    suggestions.append("What action items are still pending?")
    suggestions.append("Summarize this week's key decisions")

    for example in EXAMPLE_QUERIES:
        if len(suggestions) >= SUGGESTION_COUNT:
            break
        if example not in suggestions:
            suggestions.append(example)

    return suggestions[:SUGGESTION_COUNT]
