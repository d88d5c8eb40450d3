import pytest


def make_slots(entries):
    """(時, 分, 潮位) のリストから満干潮欄（7桁 x 4）を作る。足りない枠は 9999999 で埋める"""
    slots = [f"{h:2d}{m:2d}{level:3d}" for h, m, level in entries]
    slots += ["9999999"] * (4 - len(entries))
    return "".join(slots)


def make_row(hourly=None, yy=25, mm=1, dd=1, code="TK", highs=None, lows=None):
    """気象庁潮位表の1行（136桁）を組み立てる"""
    hourly = hourly if hourly is not None else list(range(100, 124))
    highs = highs if highs is not None else [(5, 12, 180), (17, 40, 172)]
    lows = lows if lows is not None else [(11, 3, 20), (23, 55, -4)]
    row = (
        "".join(f"{v:3d}" for v in hourly)
        + f"{yy:2d}{mm:2d}{dd:2d}"
        + code
        + make_slots(highs)
        + make_slots(lows)
    )
    assert len(row) == 136
    return row


@pytest.fixture()
def row_factory():
    return make_row


STATION_HTML = """
<html>
  <body>
    <table border="1">
      <tr><th>番号</th><th>地点記号</th><th>地点名</th><th>緯度</th><th>経度</th></tr>
      <tr><td>001</td><td>WN</td><td>稚内</td><td>45゜24'</td><td>141゜41'</td></tr>
      <tr><td colspan="5">北海道 日本海沿岸</td></tr>
      <tr><td>0123</td><td>TK</td><td> 東京 </td><td> 35゜39.0' </td><td>139゜46.2'</td></tr>
      <tr><td>125</td><td>QS</td><td>横浜</td><td>不明</td><td>139゜38'</td></tr>
      <tr><td>126</td><td>Q8</td><td>広島</td></tr>
      <tr><td>127</td><td>TK</td><td>東京（重複）</td><td>35゜39'</td><td>139゜46'</td></tr>
      <tr><td>130</td><td>NH</td><td>那覇</td><td>26゜13.0'</td><td>127゜40.0'</td></tr>
    </table>
  </body>
</html>
"""


@pytest.fixture()
def station_html():
    return STATION_HTML
