"""Chapter markup samples shaped like api.bible HTML responses."""

JOHN_3_16 = (
    '<p class="p">'
    '<span class="verse-span" data-verse-id="JHN.3.16" data-verse-org-ids="JHN.3.16">'
    '<span data-number="16" data-sid="JHN 3:16" class="v">16</span>'
    'For God so loved the world...'
    '</span>'
    '</p>'
)

PSALM_23 = (
    '<p class="p">'
    '<span class="verse-span" data-verse-id="PSA.23.3">'
    '<span data-number="3" class="v">3</span>He restores my soul.'
    '</span>'
    '<span class="verse-span" data-verse-id="PSA.23.1">'
    '<span data-number="1" class="v">1</span>Yahweh is my shepherd;'
    '</span> '
    '<span class="verse-span" data-verse-id="PSA.23.1">I shall lack nothing.</span> '
    '<span class="verse-span" data-verse-id="PSA.23.2">'
    '<span data-number="2" class="v">2</span>He makes me lie down in green pastures.'
    '</span>'
    '</p>'
)

# Verse 2's span holds only the first words; the rest sits outside any span
SPLIT_SPANS = (
    '<p class="p">'
    '<span class="v">1</span>'
    '<span class="verse-span" data-verse-id="PSA.23.1">The LORD is my shepherd;</span> '
    '<span class="verse-span" data-verse-id="PSA.23.1">I shall not want.</span> '
    '<span class="v">2</span>'
    '<span class="verse-span" data-verse-id="PSA.23.2">He makes</span>'
    ' me lie down in green pastures.'
    '</p>'
)

PARAGRAPHS_ONLY = (
    '<h3 class="s1">The Word Became Flesh</h3>'
    '<p class="p">Heading text '
    '<span data-number="1" class="v">1</span>In the beginning was the Word, '
    '<i>and</i> the Word was with God. '
    '<span data-number="2" class="v">2</span>The same was in the beginning with God.'
    '</p>'
    '<p class="p">'
    '<span data-number="3" class="v">3</span>All things were made through him.'
    '<span data-number="4" class="v">4</span>Yes'
    '</p>'
)

PLAIN_TEXT_ONLY = (
    '<div class="chapter">'
    '<p class="q1">1 In the beginning was the Word. 2 The same was in the beginning with God.'
    ' 3 Amen 4 All things were made through him.</p>'
    '</div>'
)

ENTITIES = (
    '<span class="verse-span" data-verse-id="GEN.1.1">'
    '<span class="v">1</span>In the beginning&nbsp;God created &amp; &lt;made&gt;'
    ' the heavens &amp;nbsp; and   the\n earth.'
    '</span>'
)

NO_VERSES = '<div class="chapter"><p class="q1">Selah.</p></div>'
