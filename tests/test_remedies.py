"""
Test cases for score-band suggestions.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handscreen.remedies import get_remedy_suggestions, risk_band


class TestRemedySuggestions(unittest.TestCase):
    
    def test_band_sizes(self):
        self.assertEqual(len(get_remedy_suggestions(0)), 4)
        self.assertEqual(len(get_remedy_suggestions(30)), 5)
        self.assertEqual(len(get_remedy_suggestions(50)), 7)
        self.assertEqual(len(get_remedy_suggestions(70)), 8)
        self.assertEqual(len(get_remedy_suggestions(90)), 8)
    
    def test_boundaries_switch_bands(self):
        for lower, upper in [(19, 20), (39, 40), (59, 60), (79, 80)]:
            self.assertNotEqual(get_remedy_suggestions(lower), get_remedy_suggestions(upper),
                                f"{lower} and {upper} should be in different bands")
            self.assertNotEqual(risk_band(lower), risk_band(upper))
    
    def test_same_band_same_list(self):
        self.assertEqual(get_remedy_suggestions(20), get_remedy_suggestions(39))
        self.assertEqual(get_remedy_suggestions(80), get_remedy_suggestions(100))
    
    def test_top_band_is_crisis(self):
        suggestions = get_remedy_suggestions(100)
        self.assertTrue(suggestions[0].startswith('URGENT'))
        self.assertTrue(any('988' in s for s in suggestions))
        self.assertEqual(risk_band(100).label, 'Critical - Seek Help')
    
    def test_total_outside_range(self):
        self.assertEqual(get_remedy_suggestions(-5), get_remedy_suggestions(0))
        self.assertEqual(get_remedy_suggestions(150), get_remedy_suggestions(100))
    
    def test_deterministic_and_unshared(self):
        first = get_remedy_suggestions(45)
        first.append('mutated')
        self.assertEqual(len(get_remedy_suggestions(45)), 7)
    
    def test_labels(self):
        self.assertEqual(risk_band(0).label, 'Very Low Risk')
        self.assertEqual(risk_band(20).label, 'Low Risk')
        self.assertEqual(risk_band(40).label, 'Moderate Risk')
        self.assertEqual(risk_band(60).label, 'High Risk')


if __name__ == '__main__':
    unittest.main()
