"""
Localized strings.

One Translations record per Language. Bundles are checked when
this module is imported, so a missing or empty string fails at
startup instead of in the middle of a session.
"""

from dataclasses import dataclass, fields
from typing import Dict, Tuple

from ficus.core.config import Language


@dataclass(frozen=True)
class GoldenRule:
    """A rule from a legendary trader."""
    author: str
    rule: str


@dataclass(frozen=True)
class Translations:
    """Every translatable string in the application."""

    # Lock screen
    app_title: str
    subtitle: str
    id_label: str
    id_placeholder: str
    key_label: str
    unlock_btn: str
    request_btn: str
    admin_request: str
    missing_fields_error: str
    invalid_key_error: str

    # Navigation
    discipline_hub: str
    performance_log: str
    personal_diary: str
    ficus_coach: str
    universal_laws: str
    settings: str

    # Discipline hub
    routine_items: Tuple[str, ...]
    biases: Tuple[str, ...]
    affirmations: Tuple[str, ...]
    start_calibration: str
    calibration_success: str
    calibration_fail: str
    journal_locked: str

    # Journal
    weekdays: Tuple[str, ...]
    win_rate: str
    expectancy: str
    today: str
    this_week: str

    # Review ({day}, {count}, {rate} placeholders)
    trades_closed: str
    trades_open: str
    performance_heading: str
    avg_win: str
    avg_loss: str
    by_weekday: str
    weekday_line: str
    one_change: str
    no_trades: str
    review_focus_title: str
    review_focus: Tuple[str, ...]
    suggest_cut_losers: str
    suggest_fewer_setups: str
    suggest_lighter_day: str

    # Rules
    golden_rules: Tuple[GoldenRule, ...]

    # Coach
    zen_intro: str
    coach_fallback: str

    # Sharing ({system_id}, {token}, {key} placeholders)
    request_template: str
    response_template: str

    # Admin console
    id_not_found: str
    id_too_short: str
    id_invalid_chars: str


GOLDEN_RULES_EN = (
    GoldenRule("Jesse Livermore", "The market is never wrong, opinions often are."),
    GoldenRule("Paul Tudor Jones", "Losers average losers. Never add to a losing position."),
    GoldenRule("Mark Minervini", "Cut every loss short. A small loss is the cost of doing business."),
    GoldenRule("Jesse Livermore", "Money is made by sitting, not by trading."),
)


TRANSLATIONS: Dict[Language, Translations] = {
    Language.ENGLISH: Translations(
        app_title="Ficus Mind",
        subtitle="Trading Discipline System",
        id_label="Enter your System ID",
        id_placeholder="e.g. TRADER-01",
        key_label="License Key",
        unlock_btn="Unlock",
        request_btn="Request License",
        admin_request="Send request to admin on WhatsApp",
        missing_fields_error="Please fill both ID and License Key.",
        invalid_key_error="Invalid License Key! Get a new one from Admin.",
        discipline_hub="Discipline Hub",
        performance_log="Performance Log",
        personal_diary="Personal Diary",
        ficus_coach="Ficus Coach",
        universal_laws="Universal Laws",
        settings="Settings",
        routine_items=(
            "Slept at least 7 hours",
            "Reviewed the global market cues",
            "Marked key support and resistance levels",
            "Defined maximum loss for the day",
            "Written today's trading plan",
        ),
        biases=(
            "FOMO",
            "Revenge Trading",
            "Greed",
            "Fear",
            "Overconfidence",
            "Hope",
        ),
        affirmations=(
            "I follow my plan, not my emotions.",
            "A small loss today protects my capital tomorrow.",
            "Patience is my edge.",
            "I do not need to trade every move.",
        ),
        start_calibration="Start focus calibration",
        calibration_success="Focus calibrated. The journal is open.",
        calibration_fail="Not focused yet. Breathe and try again.",
        journal_locked="Complete the routine, name two biases and calibrate your focus before journaling.",
        weekdays=("Mon", "Tue", "Wed", "Thu", "Fri"),
        win_rate="Win Rate",
        expectancy="Expectancy",
        today="Today",
        this_week="This Week",
        trades_closed="Closed",
        trades_open="Open",
        performance_heading="Performance",
        avg_win="Avg win",
        avg_loss="Avg loss",
        by_weekday="By weekday",
        weekday_line="{day}: {count} trade(s), {rate}% wins",
        one_change="ONE CHANGE NEXT WEEK",
        no_trades="No trades logged yet.",
        review_focus_title="Review focus",
        review_focus=(
            "Was the checklist done every morning?",
            "Were trades skipped for a good reason?",
        ),
        suggest_cut_losers="Cut losers at the stop-loss; average loss is eating the wins",
        suggest_fewer_setups="Take fewer, better setups; wait for the full checklist",
        suggest_lighter_day="Trade lighter on {day}; it has your lowest win rate",
        golden_rules=GOLDEN_RULES_EN,
        zen_intro="Welcome. I am your Ficus coach. Tell me how your trading day went.",
        coach_fallback="Sorry, I encountered a technical issue. Remember, discipline is the key to profitability.",
        request_template=(
            "Hello Admin, I need a license key.\n\n"
            "🆔 ID: {system_id}\n"
            "🔑 Token: {token}"
        ),
        response_template=(
            "✅ *Your license key is ready!*\n\n"
            "💻 *System ID:* {system_id}\n"
            "🔑 *License Key:* {key}\n\n"
            "*How to use:*\n"
            "1. Copy this key.\n"
            "2. Paste it in the app.\n"
            "3. Press 'Unlock'.\n\n"
            "Thank you! 🙏"
        ),
        id_not_found="No System ID found in the message.",
        id_too_short="System ID is too short (at least 2 characters).",
        id_invalid_chars="System ID contains invalid characters.",
    ),
    Language.MARATHI: Translations(
        app_title="Ficus Mind",
        subtitle="ट्रेडिंग शिस्त प्रणाली",
        id_label="तुमचा सिस्टिम आयडी टाका",
        id_placeholder="उदा. TRADER-01",
        key_label="लायसन्स की",
        unlock_btn="अनलॉक करा",
        request_btn="लायसन्सची मागणी करा",
        admin_request="व्हॉट्सअ‍ॅपवर अ‍ॅडमिनला विनंती पाठवा",
        missing_fields_error="कृपया सिस्टिम आयडी आणि लायसन्स की दोन्ही भरा.",
        invalid_key_error="चुकीची लायसन्स की! कृपया अ‍ॅडमिनकडून नवीन की मिळवा.",
        discipline_hub="शिस्त केंद्र",
        performance_log="कामगिरी नोंद",
        personal_diary="वैयक्तिक डायरी",
        ficus_coach="फायकस कोच",
        universal_laws="वैश्विक नियम",
        settings="सेटिंग्ज",
        routine_items=(
            "किमान ७ तास झोप घेतली",
            "जागतिक बाजाराचे संकेत पाहिले",
            "महत्त्वाचे सपोर्ट आणि रेझिस्टन्स स्तर ठरवले",
            "आजचा कमाल तोटा निश्चित केला",
            "आजचा ट्रेडिंग प्लॅन लिहिला",
        ),
        biases=(
            "FOMO (संधी गमावण्याची भीती)",
            "बदला घेण्यासाठी ट्रेडिंग",
            "लोभ",
            "भीती",
            "अतिआत्मविश्वास",
            "आशा",
        ),
        affirmations=(
            "मी माझ्या भावनांचे नाही, तर योजनेचे पालन करतो.",
            "आजचा छोटा तोटा उद्याचे भांडवल वाचवतो.",
            "संयम हीच माझी ताकद आहे.",
            "प्रत्येक हालचालीवर ट्रेड करण्याची गरज नाही.",
        ),
        start_calibration="फोकस कॅलिब्रेशन सुरू करा",
        calibration_success="फोकस तयार आहे. जर्नल उघडले आहे.",
        calibration_fail="अजून लक्ष केंद्रित नाही. श्वास घ्या आणि पुन्हा प्रयत्न करा.",
        journal_locked="जर्नलपूर्वी दिनक्रम पूर्ण करा, दोन भावना निवडा आणि फोकस कॅलिब्रेट करा.",
        weekdays=("सोम", "मंगळ", "बुध", "गुरु", "शुक्र"),
        win_rate="यश दर",
        expectancy="अपेक्षित नफा",
        today="आज",
        this_week="या आठवड्यात",
        trades_closed="बंद",
        trades_open="चालू",
        performance_heading="कामगिरी",
        avg_win="सरासरी नफा",
        avg_loss="सरासरी तोटा",
        by_weekday="वारानुसार",
        weekday_line="{day}: {count} ट्रेड, {rate}% यश",
        one_change="पुढील आठवड्यात एक बदल",
        no_trades="अजून एकही ट्रेड नोंदवलेला नाही.",
        review_focus_title="आढाव्याचे प्रश्न",
        review_focus=(
            "रोज सकाळी चेकलिस्ट पूर्ण झाली का?",
            "सोडलेले ट्रेड योग्य कारणाने सोडले का?",
        ),
        suggest_cut_losers="स्टॉप-लॉसवरच तोटा कापा; सरासरी तोटा तुमचा नफा खात आहे",
        suggest_fewer_setups="कमी पण चांगले सेटअप घ्या; पूर्ण चेकलिस्टची वाट पाहा",
        suggest_lighter_day="{day} ला हलके ट्रेड करा; त्या दिवशी तुमचा यशाचा दर सर्वात कमी आहे",
        golden_rules=(
            GoldenRule("जेसी लिव्हरमोर", "बाजार कधीच चुकत नाही, मते अनेकदा चुकतात."),
            GoldenRule("पॉल ट्यूडर जोन्स", "तोट्यातील पोझिशनमध्ये कधीही भर घालू नका."),
            GoldenRule("मार्क मिनर्विनी", "प्रत्येक तोटा लहान ठेवा. लहान तोटा हा व्यवसायाचा खर्च आहे."),
            GoldenRule("जेसी लिव्हरमोर", "पैसा ट्रेडिंगने नाही, तर संयमाने कमावला जातो."),
        ),
        zen_intro="नमस्कार. मी तुमचा फायकस कोच आहे. आजचा ट्रेडिंग दिवस कसा गेला ते सांगा.",
        coach_fallback="क्षमस्व, मला जोडणी करताना तांत्रिक अडचण आली. पण लक्षात ठेवा, शिस्त हीच नफ्याची गुरुकिल्ली आहे.",
        request_template=(
            "नमस्कार अ‍ॅडमिन, मला लायसन्स की हवी आहे.\n\n"
            "🆔 ID: {system_id}\n"
            "🔑 Token: {token}"
        ),
        response_template=(
            "✅ *तुमची लायसन्स की तयार आहे!*\n\n"
            "💻 *System ID:* {system_id}\n"
            "🔑 *License Key:* {key}\n\n"
            "*कसे वापरावे:*\n"
            "१. ही की कॉपी करा.\n"
            "२. अ‍ॅपमध्ये पेस्ट करा.\n"
            "३. 'Unlock' बटण दाबा.\n\n"
            "धन्यवाद! 🙏"
        ),
        id_not_found="मेसेजमध्ये सिस्टम आयडी सापडला नाही.",
        id_too_short="सिस्टम आयडी खूप लहान आहे (किमान २ अक्षरे हवीत).",
        id_invalid_chars="आयडीमध्ये अवैध अक्षरे आहेत.",
    ),
    Language.HINDI: Translations(
        app_title="Ficus Mind",
        subtitle="ट्रेडिंग अनुशासन प्रणाली",
        id_label="अपना सिस्टम आईडी दर्ज करें",
        id_placeholder="उदा. TRADER-01",
        key_label="लाइसेंस की",
        unlock_btn="अनलॉक करें",
        request_btn="लाइसेंस का अनुरोध करें",
        admin_request="व्हाट्सएप पर एडमिन को अनुरोध भेजें",
        missing_fields_error="कृपया सिस्टम आईडी और लाइसेंस की दोनों भरें।",
        invalid_key_error="गलत लाइसेंस की! कृपया एडमिन से नई की प्राप्त करें।",
        discipline_hub="अनुशासन केंद्र",
        performance_log="प्रदर्शन लॉग",
        personal_diary="निजी डायरी",
        ficus_coach="फाइकस कोच",
        universal_laws="सार्वभौमिक नियम",
        settings="सेटिंग्स",
        routine_items=(
            "कम से कम 7 घंटे की नींद ली",
            "वैश्विक बाजार के संकेत देखे",
            "मुख्य सपोर्ट और रेज़िस्टेंस स्तर तय किए",
            "आज का अधिकतम नुकसान तय किया",
            "आज की ट्रेडिंग योजना लिखी",
        ),
        biases=(
            "FOMO (मौका छूटने का डर)",
            "बदले की ट्रेडिंग",
            "लालच",
            "डर",
            "अति आत्मविश्वास",
            "उम्मीद",
        ),
        affirmations=(
            "मैं अपनी भावनाओं का नहीं, अपनी योजना का पालन करता हूँ।",
            "आज का छोटा नुकसान कल की पूंजी बचाता है।",
            "धैर्य ही मेरी ताकत है।",
            "हर हलचल पर ट्रेड करना ज़रूरी नहीं है।",
        ),
        start_calibration="फोकस कैलिब्रेशन शुरू करें",
        calibration_success="फोकस तैयार है। जर्नल खुल गया है।",
        calibration_fail="अभी ध्यान केंद्रित नहीं है। साँस लें और फिर से प्रयास करें।",
        journal_locked="जर्नल से पहले दिनचर्या पूरी करें, दो भावनाएँ चुनें और फोकस कैलिब्रेट करें।",
        weekdays=("सोम", "मंगल", "बुध", "गुरु", "शुक्र"),
        win_rate="जीत दर",
        expectancy="अपेक्षित लाभ",
        today="आज",
        this_week="इस सप्ताह",
        trades_closed="बंद",
        trades_open="खुले",
        performance_heading="प्रदर्शन",
        avg_win="औसत लाभ",
        avg_loss="औसत हानि",
        by_weekday="सप्ताह के दिन अनुसार",
        weekday_line="{day}: {count} ट्रेड, {rate}% जीत",
        one_change="अगले सप्ताह एक बदलाव",
        no_trades="अभी तक कोई ट्रेड दर्ज नहीं हुआ।",
        review_focus_title="समीक्षा के प्रश्न",
        review_focus=(
            "क्या हर सुबह चेकलिस्ट पूरी हुई?",
            "क्या छोड़े गए ट्रेड सही कारण से छोड़े गए?",
        ),
        suggest_cut_losers="स्टॉप-लॉस पर नुकसान काटें; औसत नुकसान आपकी जीत खा रहा है",
        suggest_fewer_setups="कम लेकिन बेहतर सेटअप लें; पूरी चेकलिस्ट का इंतज़ार करें",
        suggest_lighter_day="{day} को हल्का ट्रेड करें; उस दिन आपकी जीत दर सबसे कम है",
        golden_rules=(
            GoldenRule("जेसी लिवरमोर", "बाज़ार कभी गलत नहीं होता, राय अक्सर गलत होती है।"),
            GoldenRule("पॉल ट्यूडर जोन्स", "घाटे वाली पोज़िशन में कभी न जोड़ें।"),
            GoldenRule("मार्क मिनर्विनी", "हर नुकसान छोटा रखें। छोटा नुकसान व्यापार की लागत है।"),
            GoldenRule("जेसी लिवरमोर", "पैसा ट्रेडिंग से नहीं, धैर्य से बनता है।"),
        ),
        zen_intro="नमस्ते। मैं आपका फाइकस कोच हूँ। बताइए आज का ट्रेडिंग दिन कैसा रहा।",
        coach_fallback="क्षमा करें, मुझे कनेक्ट करने में तकनीकी समस्या हुई। याद रखें, अनुशासन ही मुनाफे की कुंजी है।",
        request_template=(
            "नमस्ते एडमिन, मुझे लाइसेंस की चाहिए।\n\n"
            "🆔 ID: {system_id}\n"
            "🔑 Token: {token}"
        ),
        response_template=(
            "✅ *आपकी लाइसेंस की तैयार है!*\n\n"
            "💻 *System ID:* {system_id}\n"
            "🔑 *License Key:* {key}\n\n"
            "*कैसे उपयोग करें:*\n"
            "1. यह की कॉपी करें।\n"
            "2. ऐप में पेस्ट करें।\n"
            "3. 'Unlock' बटन दबाएँ।\n\n"
            "धन्यवाद! 🙏"
        ),
        id_not_found="मैसेज में सिस्टम आईडी नहीं मिला।",
        id_too_short="सिस्टम आईडी बहुत छोटा है (कम से कम 2 अक्षर)।",
        id_invalid_chars="आईडी में अमान्य अक्षर हैं।",
    ),
}

TEMPLATE_PLACEHOLDERS = {
    "request_template": ("{system_id}", "{token}"),
    "response_template": ("{system_id}", "{key}"),
    "weekday_line": ("{day}", "{count}", "{rate}"),
    "suggest_lighter_day": ("{day}",),
}


def _validate_bundles(bundles: Dict[Language, Translations]) -> None:
    """
    Check translation bundles for completeness.

    Raises:
        ValueError: If a language is missing, a string is blank,
            list lengths differ between languages or a template
            lacks a placeholder
    """
    missing = [lang.value for lang in Language if lang not in bundles]
    if missing:
        raise ValueError(f"Missing translations for: {', '.join(missing)}")

    reference = bundles[Language.ENGLISH]

    for lang, bundle in bundles.items():
        for field in fields(Translations):
            value = getattr(bundle, field.name)

            if isinstance(value, tuple):
                if len(value) != len(getattr(reference, field.name)):
                    raise ValueError(f"{lang.value}.{field.name} has {len(value)} items, expected {len(getattr(reference, field.name))}")
                items = [v.rule if isinstance(v, GoldenRule) else v for v in value]
            else:
                items = [value]

            if any(not item.strip() for item in items):
                raise ValueError(f"{lang.value}.{field.name} is blank")

        for name, placeholders in TEMPLATE_PLACEHOLDERS.items():
            template = getattr(bundle, name)
            for placeholder in placeholders:
                if placeholder not in template:
                    raise ValueError(f"{lang.value}.{name} lacks {placeholder}")


_validate_bundles(TRANSLATIONS)


def get_translations(language: Language) -> Translations:
    """Get the bundle for a language, English if unknown."""
    try:
        return TRANSLATIONS[Language(language)]
    except ValueError:
        return TRANSLATIONS[Language.ENGLISH]
