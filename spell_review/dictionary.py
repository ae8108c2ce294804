"""
Spelling Dictionary
===================
Static, process-wide lookup tables:

- COMMON_MISSPELLINGS: lowercase misspelling -> ordered correct alternatives
- KNOWN_WORDS: lowercase words that are spelled correctly and never flagged

Both tables are built once at import and exposed read-only, so they can be
shared across threads without locking.
"""

from pathlib import Path
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

__version__ = "1.0.0"


_MISSPELLINGS = {
    # Very common misspellings
    'teh': ('the',),
    'recieve': ('receive',),
    'occured': ('occurred',),
    'seperate': ('separate',),
    'definately': ('definitely',),
    'wierd': ('weird',),
    'untill': ('until',),
    'wich': ('which', 'witch'),
    'thier': ('their', 'there', "they're"),
    'becuase': ('because',),
    'beleive': ('believe',),
    'freind': ('friend',),
    'goverment': ('government',),
    'occassion': ('occasion',),
    'recomend': ('recommend',),
    'begining': ('beginning',),
    'calender': ('calendar',),
    'enviroment': ('environment',),
    'existance': ('existence',),
    'fourty': ('forty',),
    'harrass': ('harass',),
    'independant': ('independent',),
    'neccessary': ('necessary',),
    'occassionally': ('occasionally',),
    'persue': ('pursue',),
    'questionaire': ('questionnaire',),
    'reccomend': ('recommend',),
    'succesful': ('successful',),
    'tommorow': ('tomorrow',),
    'unfortunatly': ('unfortunately',),
    'usefull': ('useful',),
    'wellcome': ('welcome',),
    'accomodate': ('accommodate',),
    'acheive': ('achieve',),
    'adress': ('address',),
    'alot': ('a lot',),
    'alright': ('all right',),
    'arguement': ('argument',),
    'basicly': ('basically',),
    'buisness': ('business',),
    'catagory': ('category',),
    'cemetary': ('cemetery',),
    'changable': ('changeable',),
    'collegue': ('colleague',),
    'comming': ('coming',),
    'commitee': ('committee',),
    'concious': ('conscious',),
    'curiousity': ('curiosity',),
    'desparate': ('desperate',),
    'developement': ('development',),
    'disapear': ('disappear',),
    'dissapoint': ('disappoint',),
    'embarass': ('embarrass',),
    'exagerate': ('exaggerate',),
    'excellant': ('excellent',),
    'experiance': ('experience',),
    'familar': ('familiar',),
    'finaly': ('finally',),
    'foriegn': ('foreign',),
    'grammer': ('grammar',),
    'greatful': ('grateful',),
    'gaurd': ('guard',),
    'happend': ('happened',),
    'hieght': ('height',),
    'humerous': ('humorous',),
    'immediatly': ('immediately',),
    'incidently': ('incidentally',),
    'interupt': ('interrupt',),
    'irresistable': ('irresistible',),
    'knowlege': ('knowledge',),
    'liason': ('liaison',),
    'libary': ('library',),
    'lisence': ('license',),
    'maintainance': ('maintenance',),
    'medcine': ('medicine',),
    'millenium': ('millennium',),
    'minature': ('miniature',),
    'mischievious': ('mischievous',),
    'neice': ('niece',),
    'noticable': ('noticeable',),
    'occurence': ('occurrence',),
    'pavillion': ('pavilion',),
    'peice': ('piece',),
    'personaly': ('personally',),
    'possesion': ('possession',),
    'prefered': ('preferred',),
    'privelege': ('privilege',),
    'probly': ('probably',),
    'publically': ('publicly',),
    'refered': ('referred',),
    'relevent': ('relevant',),
    'religous': ('religious',),
    'repitition': ('repetition',),
    'rythm': ('rhythm',),
    'sence': ('sense', 'since'),
    'sieze': ('seize',),
    'similiar': ('similar',),
    'speach': ('speech',),
    'succede': ('succeed',),
    'supercede': ('supersede',),
    'suprise': ('surprise',),
    'temperture': ('temperature',),
    'tendancy': ('tendency',),
    'therefor': ('therefore',),
    'truely': ('truly',),
    'tyrany': ('tyranny',),
    'underate': ('underrate',),
    'useable': ('usable',),
    'vaccuum': ('vacuum',),
    'visable': ('visible',),
    'wether': ('whether', 'weather'),
    'whereever': ('wherever',),
}

COMMON_MISSPELLINGS: Mapping[str, Tuple[str, ...]] = MappingProxyType(_MISSPELLINGS)


# Core vocabulary of correctly spelled words
_CORE_WORDS = """
a about above across act add after again against age ago agree air all almost
alone along already also although always am among an and animal another answer
any anyone anything appear apple are area arm around art as ask at away back bad
ball bank base be bear beautiful became because become bed been before began
begin behind being believe below best better between big bird black blue board
boat body book both box boy bring brother brought build built business but buy
by call came can car care carry case cat cause center change check child
children city class clean clear close code cold color come common company
complete could country course cover cross cut dark data day dear deep did
different do doctor does dog done door down draw dream drive during each early
earth east easy eat edge end enough even evening event ever every example eye
face fact fall family far fast father feel feet few field file find fine fire
first fish five follow food foot for force form found four free friend from
front full game gave get girl give go good got great green ground group grow
had half hand happen happy hard has have he head hear heard heart hello help her here
high him his hold home hope horse hot hour house how however i idea if
important in inside into is it its just keep kind knew know land language large
last late later learn least leave left less let letter life light like line
list little live long look lost lot love low made main make man many map mark
may me mean men might mind minute miss money month more morning most mother
move much music must my name near need never new next night no not note
nothing notice now number of off often oh old on once one only open or order
other our out over own page paper part pass past people perhaps person picture
piece place plan plant play point poor power problem program pull put question
quick quickly quite rain ran reach read ready real really red remember rest
right river road rock room round run said same saw say school sea second see
seem seen self sentence set several shall she ship short should show side
simple since sing sit six size sleep slow small snow so some something
sometimes song soon sound south space speak special spell stand star start
state stay step still stop story street strong study such sun sure system
table take talk teacher tell ten test text than that the their them then there
these they thing think this those though thought three through time to today
together told too took top toward town tree true try turn two under until up
upon us use usually very voice wait walk want war warm was watch water way we
week well went were what when where which while white who whole why will wind
window with without woman women word words work world would write year yes yet
you young your
""".split()

_CONTRACTIONS = """
i'm i've i'll i'd you're you've you'll you'd he's he'll he'd she's she'll she'd
it's it'll we're we've we'll we'd they're they've they'll they'd that's there's
what's who's let's isn't aren't wasn't weren't don't doesn't didn't can't
couldn't won't wouldn't shouldn't haven't hasn't hadn't
""".split()

# Inflected forms of the core vocabulary
_INFLECTIONS = """
acts acted acting adds added adding agrees agreed agreeing animals answers
answered answering appears appeared appearing apples areas arms asks asked
asking balls banks bases bears begins beginning begun believes believed
believing birds boards boats books boxes boys brings bringing brothers builds
building buys buying calls called calling cars cares cared caring carries
carried carrying cases cats causes caused causing changes changed changing
checks checked checking cities classes cleaned closes closed closing colors
comes coming covers covered covering crosses crossed cuts cutting days doctors
dogs doors draws drew drawn drawing dreams dreamed dreaming drives drove driven
driving ends ended ending eats ate eaten eating edges events eyes faces facts
falls fell fallen falling feels felt feeling fields files filed finds finding
fires fish follows followed following forms formed forming friends games gets
getting gotten girls gives given giving goes going gone groups grows grew
grown growing hands happens happened happening hears hearing helps helped
helping holds held holding homes hopes hoped hoping horses hours houses ideas
keeps kept keeping kinds knows known knowing lands languages lasts lasted
learns learned learning leaves leaving letters lights likes liked liking lines
lists listed lives lived living looks looked looking loves loved loving makes
making maps marks marked means meant meaning minds minutes misses missed
months mornings moves moved moving names named needs needed needing notes
noted notices noticed numbers opens opened opening orders ordered pages papers
parts passes passed passing pictures pieces places placed plans planned plants
plays played playing points pointed problems programs pulls pulled puts
putting questions reaches reached reading rests rivers roads rocks rooms runs
running says saying schools seas seconds sees seeing seems seemed sentences
sets setting ships shows showed shown showing sides sings sang sung singing
sits sat sitting sizes sleeps slept songs sounds sounded speaks spoke spoken
speaking stands stood standing stars starts started starting states stays
stayed steps stops stopped stopping stories streets studies studied suns takes
taken taking talks talked talking teachers tells telling tests tested testing
texts things thinks thinking times trees tries tried trying turns turned
turning uses used using waits waited waiting walks walked walking wants wanted
wanting watches watched watching ways weeks winds windows works worked working
writes wrote written writing years
""".split()


def _alternative_words(table: Mapping[str, Iterable[str]]) -> Set[str]:
    """Every word appearing in a correct alternative, e.g. 'a lot' -> a, lot."""
    words: Set[str] = set()
    for alternatives in table.values():
        for alternative in alternatives:
            words.add(alternative)
            words.update(alternative.split())
    return words


KNOWN_WORDS: FrozenSet[str] = frozenset(
    set(_CORE_WORDS) | set(_CONTRACTIONS) | set(_INFLECTIONS)
    | _alternative_words(_MISSPELLINGS)
)


def capitalize(word: str) -> str:
    """Uppercase the first character only, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def starts_uppercase(word: str) -> bool:
    """True when the word's first character is an uppercase letter."""
    return word[:1].isupper()


def lookup(word: str) -> Optional[List[str]]:
    """
    Look up a known misspelling.

    Returns the correct alternatives with the original word's leading
    capitalization applied, or None when the word is not a known
    misspelling. Exact match only.
    """
    alternatives = COMMON_MISSPELLINGS.get(word.lower())
    if alternatives is None:
        return None
    if starts_uppercase(word):
        return [capitalize(a) for a in alternatives]
    return list(alternatives)


def is_known_misspelling(word: str) -> bool:
    return word.lower() in COMMON_MISSPELLINGS


def is_known_word(word: str, extra_words: Optional[FrozenSet[str]] = None) -> bool:
    """Check if a word is in the vocabulary (or in caller-supplied extras)."""
    lowered = word.lower().replace('’', "'")
    if lowered in KNOWN_WORDS:
        return True
    return bool(extra_words) and lowered in extra_words


def load_word_list(filepath: str) -> FrozenSet[str]:
    """Load extra known words from a file (one word per line, # comments)."""
    with open(Path(filepath), 'r', encoding='utf-8') as f:
        return frozenset(
            line.strip().lower()
            for line in f
            if line.strip() and not line.lstrip().startswith('#')
        )
