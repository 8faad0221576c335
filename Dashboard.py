# Dashboard.py
#
# Browser UI served at GET /. Pure API consumer: it polls the JSON endpoints
# and posts actuator toggles; nothing here is rendered server-side.
#
# Polling: latest reading + actuators every 3s, history (last 20) every 10s.
# Failures go to the console and are retried by the next scheduled poll.

# Do not use f-strings here: CSS/JS contain many { } braces.
DASHBOARD_HTML = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>__APP_TITLE__</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
      background: #f5f7fa;
      color: #333;
    }
    .header {
      background: linear-gradient(135deg, #22c55e 0%, #15803d 100%);
      color: white;
      padding: 24px;
      box-shadow: 0 4px 6px rgba(0,0,0,0.1);
    }
    .header h1 { font-size: 28px; margin-bottom: 8px; }
    .container { max-width: 1200px; margin: 0 auto; padding: 24px; }
    .grid {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
      gap: 20px;
      margin-bottom: 24px;
    }
    .card {
      background: white;
      border-radius: 8px;
      padding: 20px;
      box-shadow: 0 2px 8px rgba(0,0,0,0.05);
      border-top: 4px solid #22c55e;
    }
    .card h3 { font-size: 16px; margin-bottom: 16px; color: #333; }
    .sensor-grid {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(120px, 1fr));
      gap: 16px;
    }
    .sensor-item {
      background: #f9fafb;
      padding: 12px;
      border-radius: 6px;
      border-left: 3px solid #22c55e;
    }
    .sensor-label { font-size: 11px; color: #666; text-transform: uppercase; letter-spacing: 0.5px; margin-bottom: 6px; }
    .sensor-value { font-size: 20px; font-weight: 600; color: #333; }
    .sensor-unit { font-size: 12px; color: #999; margin-left: 2px; }
    .muted { font-size: 12px; color: #666; margin-top: 12px; }
    .actuator { display: flex; align-items: center; justify-content: space-between; padding: 8px 0; }
    .btn {
      padding: 8px 16px;
      border-radius: 6px;
      border: 1px solid #ddd;
      background: white;
      cursor: pointer;
      font-size: 14px;
    }
    .btn.on { background: #22c55e; color: white; border-color: #22c55e; }
    table { width: 100%; border-collapse: collapse; font-size: 13px; }
    th, td { text-align: left; padding: 6px 8px; border-bottom: 1px solid #eee; }
    th { color: #666; font-weight: 600; text-transform: uppercase; font-size: 11px; }
  </style>
</head>
<body>
<div class="header">
  <h1>__APP_TITLE__</h1>
  <p style="font-size: 14px; opacity: 0.95;">Live readings and actuator control</p>
</div>
<div class="container">
  <div class="grid">
    <div class="card">
      <h3>Latest Reading</h3>
      <div class="sensor-grid">
        <div class="sensor-item">
          <div class="sensor-label">Temperature</div>
          <span class="sensor-value" id="temp">—</span><span class="sensor-unit">°C</span>
        </div>
        <div class="sensor-item">
          <div class="sensor-label">Humidity</div>
          <span class="sensor-value" id="humidity">—</span><span class="sensor-unit">%</span>
        </div>
        <div class="sensor-item">
          <div class="sensor-label">Soil</div>
          <span class="sensor-value" id="soil">—</span>
        </div>
      </div>
      <div class="muted">Updated: <span id="ts">—</span></div>
    </div>
    <div class="card">
      <h3>Actuators</h3>
      <div class="actuator">
        <span>Pump <span class="muted" id="state-pump">State: —</span></span>
        <button class="btn" id="btn-pump" data-state="0">Toggle</button>
      </div>
      <div class="actuator">
        <span>Fan <span class="muted" id="state-fan">State: —</span></span>
        <button class="btn" id="btn-fan" data-state="0">Toggle</button>
      </div>
    </div>
  </div>
  <div class="card">
    <h3>Recent Readings</h3>
    <table id="history-table">
      <thead><tr><th>Time</th><th>Temp</th><th>Humidity</th><th>Soil</th></tr></thead>
      <tbody></tbody>
    </table>
  </div>
</div>
<script>
const API_BASE = '/api';

function fmt(v) {
  return (typeof v === 'number') ? v.toFixed(1) : '—';
}

async function fetchLatest() {
  try {
    const res = await fetch(API_BASE + '/readings/latest');
    const j = await res.json();
    if (j && j.created_at) {
      document.getElementById('temp').textContent = fmt(j.temp);
      document.getElementById('humidity').textContent = fmt(j.humidity);
      document.getElementById('soil').textContent = j.soil;
      document.getElementById('ts').textContent = j.created_at;
    }
  } catch (e) {
    console.error('Error fetching latest', e);
  }
}

async function fetchHistory() {
  try {
    const res = await fetch(API_BASE + '/readings?limit=20');
    const rows = await res.json();
    if (!Array.isArray(rows)) return;
    const tbody = document.querySelector('#history-table tbody');
    tbody.innerHTML = '';
    rows.forEach(r => {
      const tr = document.createElement('tr');
      [r.created_at, fmt(r.temp), fmt(r.humidity), r.soil].forEach(v => {
        const td = document.createElement('td');
        td.textContent = v;
        tr.appendChild(td);
      });
      tbody.appendChild(tr);
    });
  } catch (e) {
    console.error('Error fetching history', e);
  }
}

function showActuator(name, a) {
  if (!a) return;
  const btn = document.getElementById('btn-' + name);
  document.getElementById('state-' + name).textContent = 'State: ' + (a.state === 1 ? 'ON' : 'OFF');
  btn.dataset.state = a.state;
  btn.classList.toggle('on', a.state === 1);
}

async function fetchActuators() {
  try {
    const res = await fetch(API_BASE + '/actuators');
    const j = await res.json();
    showActuator('pump', j.pump);
    showActuator('fan', j.fan);
  } catch (e) {
    console.error('Error fetching actuators', e);
  }
}

async function toggleActuator(name) {
  const btn = document.getElementById('btn-' + name);
  const next = parseInt(btn.dataset.state || '0', 10) === 1 ? 0 : 1;
  try {
    const res = await fetch(API_BASE + '/actuator', {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify({ name: name, state: next })
    });
    const j = await res.json();
    if (j.ok) {
      await fetchActuators();
    } else {
      console.warn('Failed to update actuator', j);
    }
  } catch (e) {
    console.error('Error toggling actuator', e);
  }
}

document.getElementById('btn-pump').addEventListener('click', () => toggleActuator('pump'));
document.getElementById('btn-fan').addEventListener('click', () => toggleActuator('fan'));

fetchLatest();
fetchHistory();
fetchActuators();
setInterval(fetchLatest, 3000);
setInterval(fetchActuators, 3000);
setInterval(fetchHistory, 10000);
</script>
</body>
</html>
"""


def render_dashboard(app_title: str) -> str:
    return DASHBOARD_HTML.replace("__APP_TITLE__", app_title)
