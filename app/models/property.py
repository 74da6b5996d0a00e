"""
Property categories and the guest-facing copy for each
"""
from dataclasses import dataclass
from enum import Enum


class PropertyCategory(str, Enum):
    RIAD = "riad"
    KASBAH = "kasbah"
    DESERT_CAMP = "desert_camp"

    @classmethod
    def classify(cls, property_name: str) -> "PropertyCategory":
        """Map a free-text property name to its category"""
        name = (property_name or "").lower()
        if "kasbah" in name:
            return cls.KASBAH
        if "desert" in name or "camp" in name:
            return cls.DESERT_CAMP
        return cls.RIAD


@dataclass(frozen=True)
class PropertyContent:
    name: str
    subtitle: str
    directions: tuple
    signoff: str
    footer: str
    check_in_time: str
    check_out_time: str


PROPERTY_CONTENT = {
    PropertyCategory.RIAD: PropertyContent(
        name="Riad di Siena",
        subtitle="Thank you for choosing Riad di Siena. We are preparing the house to receive you.",
        directions=(
            "The Medina is pedestrian-only. Have your driver drop you at <strong>Café Medina Rouge</strong> "
            "(near Koutoubia Mosque). From there, it's a 2-minute walk to our door at 35–37 Derb Fhal Zefriti.",
            "We can arrange a private driver from the airport for 200 MAD. Just let us know when you confirm your arrival.",
        ),
        signoff="The Riad",
        footer="Riad di Siena · 35–37 Derb Fhal Zefriti · Marrakech Medina",
        check_in_time="3:00 PM",
        check_out_time="11:00 AM",
    ),
    PropertyCategory.KASBAH: PropertyContent(
        name="The Kasbah",
        subtitle="Thank you for choosing The Kasbah. We are preparing your rooms in the Draa Valley.",
        directions=(
            "The Kasbah is located in the Draa Valley, approximately 2 hours from Ouarzazate airport or 5 hours from Marrakech.",
            "<strong>We will coordinate your transfer details</strong> once you confirm your arrival time. "
            "Most guests arrive via private driver from Marrakech or Ouarzazate.",
        ),
        signoff="The Kasbah",
        footer="The Kasbah · Draa Valley · Morocco",
        check_in_time="3:00 PM",
        check_out_time="11:00 AM",
    ),
    PropertyCategory.DESERT_CAMP: PropertyContent(
        name="The Desert Camp",
        subtitle="Thank you for choosing The Desert Camp. The Sahara awaits.",
        directions=(
            "The camp is located in the Erg Chebbi dunes near Merzouga, approximately 5 hours from Ouarzazate or 9 hours from Marrakech.",
            "<strong>We will coordinate your transfer and camel trek</strong> once you confirm your arrival time. "
            "Most guests arrive in Merzouga by mid-afternoon for the sunset camel ride to camp.",
        ),
        signoff="The Desert Camp",
        footer="The Desert Camp · Erg Chebbi · Sahara",
        check_in_time="4:00 PM",
        check_out_time="10:00 AM",
    ),
}


def get_property_content(property_name: str) -> PropertyContent:
    return PROPERTY_CONTENT[PropertyCategory.classify(property_name)]
