"""Shared fixtures: a trimmed copy of the i2pd web console main page."""

from __future__ import annotations

import pytest

CONSOLE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head><title>Purple I2P Webconsole</title></head>
<body>
<div class="content">
<b>Uptime:</b> 2 days, 3 hours, 4 minutes, 5 seconds<br>
<b>Network status:</b> OK<br>
<b>Network status v6:</b> Firewalled<br>
<b>Tunnel creation success rate:</b> 42%<br>
<b>Received:</b> 2.00 GiB (150.00 KiB/s)<br>
<b>Sent:</b> 512 MiB (1.5 MiB/s)<br>
<b>Transit:</b> 10 KiB<br>
<b>Data path:</b> /var/lib/i2pd<br>
<b>Router Caps:</b> LR~U<br>
<b>Our external address:</b><br>
<table class="extaddr"><tbody>
<tr>
<td>NTCP2</td>
<td>198.51.100.7:12345</td>
</tr>
<tr><td>SSU2</td><td>[2001:db8::1]:12345</td></tr>
</tbody></table>
<br>
<b>Routers:</b> 3012 <b>Floodfills:</b> 598 <b>LeaseSets:</b> 41<br>
<b>Client Tunnels:</b> 18 <b>Transit Tunnels:</b> 233<br>
<br>
<table class="services"><caption>Services</caption><tbody>
<tr><td>HTTP Proxy</td><td class='enabled'>Enabled</td></tr>
<tr><td>SOCKS Proxy</td><td class='enabled'>Enabled</td></tr>
<tr><td>BOB</td><td class='disabled'>Disabled</td></tr>
<tr><td>SAM</td><td class='enabled'>Enabled</td></tr>
<tr><td>I2CP</td><td class='disabled'>Disabled</td></tr>
<tr><td>I2PControl</td><td class='disabled'>Disabled</td></tr>
</tbody></table>
</div>
</body>
</html>
"""


@pytest.fixture()
def console_html() -> str:
    return CONSOLE_HTML
