"""
Fixed lexicons and substitution maps used by the classification and rephrasing pipeline.

All tables are immutable module constants. Replacement maps are applied in
insertion order, which keeps rule-based output reproducible when patterns
overlap (e.g. "suck" before "sucks").
"""

from types import MappingProxyType

# Offensive terms matched as whole words by the content filter
OFFENSIVE_WORDS = (
    "hate", "stupid", "idiot", "dumb", "moron", "loser",
    "fool", "jerk", "ass", "damn", "hell", "crap", "suck",
)

NEGATIVE_WORDS = frozenset({
    "angry", "hate", "terrible", "awful", "horrible", "bad", "worst",
    "stupid", "dumb", "idiot", "moron", "jerk", "ugly", "nasty",
    "disgusting", "pathetic", "miserable", "useless", "worthless",
    "disaster", "failure", "failed", "disappointing", "disappointed",
    "sucks", "suck", "damn", "hell", "crap", "shit", "fuck",
    "kill", "die", "death", "dead", "hurt", "pain", "suffer",
    "cruel", "evil", "vile", "wicked", "sick", "gross", "creepy",
    "scared", "afraid", "fear", "worry", "anxious", "stress", "sad",
    "depressed", "depressing", "gloomy", "misery", "despair", "hopeless",
})

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "terrific", "outstanding", "exceptional", "incredible", "brilliant",
    "superb", "fabulous", "perfect", "awesome", "impressive", "remarkable",
    "love", "happy", "joy", "joyful", "delighted", "pleased", "glad",
    "satisfied", "content", "proud", "excited", "thrilled", "enthusiastic",
    "positive", "optimistic", "hopeful", "encouraging", "inspired", "inspiring",
    "kind", "caring", "generous", "helpful", "supportive", "thoughtful",
    "beautiful", "pretty", "handsome", "lovely", "gorgeous", "attractive",
    "smart", "intelligent", "clever", "wise", "insightful", "innovative",
})

# Offensive term -> neutral wording. Both "suck" and "sucks" are listed: matching is whole-word, not stemmed.
OFFENSIVE_REPLACEMENTS = MappingProxyType({
    "stupid": "misguided",
    "idiot": "person",
    "dumb": "uninformed",
    "moron": "individual",
    "hate": "dislike",
    "suck": "is inadequate",
    "sucks": "is inadequate",
    "crap": "poor quality",
    "jerk": "difficult person",
    "fool": "mistaken person",
    "loser": "struggling person",
    "ass": "person",
    "damn": "darn",
    "hell": "heck",
})

NEGATIVE_PHRASE_REPLACEMENTS = MappingProxyType({
    "this is terrible": "this could be improved",
    "i hate this": "I'm not fond of this",
    "worst thing ever": "disappointing experience",
    "complete disaster": "significant issue",
    "absolutely useless": "not currently effective",
    "never works": "inconsistently functions",
    "waste of time": "not the best use of time",
    "waste of money": "questionable value",
})

# Hedges for absolute or overconfident claims
MISINFO_PHRASE_REPLACEMENTS = MappingProxyType({
    "everyone knows": "some believe",
    "scientists have proven": "some research suggests",
    "undeniable proof": "evidence that suggests",
    "definitely causes": "may be associated with",
    "always": "sometimes",
    "never": "rarely",
    "100% certain": "possible",
    "guaranteed": "potential",
})
