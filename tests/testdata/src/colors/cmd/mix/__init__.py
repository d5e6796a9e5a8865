import colors.red
import couleurs.red as rouge

try:
    import ujson as json
except ImportError:
    import json


def main():
    print(json.dumps([colors.red.RED, rouge.ROUGE]))
